"""Natural-key upserts for site settings and users."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from kaptan.database import Base
from kaptan.errors import KaptanError, StoreUnavailableError, WriteOutcome
from kaptan.models import SiteSetting, User
from kaptan.repositories.base import Repository, translate_store_errors
from kaptan.upsert import Clock, UpsertPlan, plan_upsert, plan_user_upsert, utcnow

logger = logging.getLogger(__name__)


def apply_upsert(
    db: Session, model: type[Base], key_field: str, plan: UpsertPlan
) -> Base:
    """Insert ``plan.insert_values`` or patch the existing row with ``update_set``."""
    key_value = plan.insert_values[key_field]
    with translate_store_errors(db, f"upsert {model.__tablename__}"):
        entity = db.scalars(
            select(model).where(getattr(model, key_field) == key_value).limit(1)
        ).first()
        if entity is None:
            entity = model(**plan.insert_values)
            db.add(entity)
        else:
            for name, value in plan.update_set.items():
                setattr(entity, name, value)
        db.commit()
        db.refresh(entity)
    return entity


class SiteSettingRepository(Repository[SiteSetting]):
    model = SiteSetting

    def __init__(self, db: Session, *, now: Clock = utcnow):
        super().__init__(db)
        self.now = now

    def ordering(self):
        return (SiteSetting.group.asc(), SiteSetting.key.asc())

    def list_by_group(self, group: str) -> list[SiteSetting]:
        stmt = (
            select(SiteSetting)
            .where(SiteSetting.group == group)
            .order_by(*self.ordering())
        )
        with translate_store_errors(self.db, "list settings by group"):
            return list(self.db.scalars(stmt).all())

    def get_by_key(self, key: str) -> SiteSetting | None:
        stmt = select(SiteSetting).where(SiteSetting.key == key).limit(1)
        with translate_store_errors(self.db, "load setting"):
            return self.db.scalars(stmt).first()

    def upsert(self, key: str, fields: Mapping[str, Any]) -> SiteSetting:
        # A null type means "keep the column default"; it is never written.
        fields = {
            name: value
            for name, value in fields.items()
            if not (name == "type" and value is None)
        }
        plan = plan_upsert("key", key, fields, touch_field="updated_at", now=self.now)
        setting = apply_upsert(self.db, SiteSetting, "key", plan)
        logger.info("Upserted setting %s", key)
        return setting

    def bulk_upsert(self, items: Iterable[tuple[str, Mapping[str, Any]]]) -> int:
        count = 0
        for key, fields in items:
            self.upsert(key, fields)
            count += 1
        return count

    def delete_by_key(self, key: str) -> bool:
        setting = self.get_by_key(key)
        if setting is None:
            return False
        return self.delete(setting.id)

    def as_mapping(self) -> dict[str, str]:
        """Flat key -> value map, skipping empty values."""
        return {s.key: s.value for s in self.list() if s.value}


class UserRepository(Repository[User]):
    model = User

    def __init__(
        self,
        db: Session,
        *,
        owner_open_id: str | None = None,
        now: Clock = utcnow,
    ):
        super().__init__(db)
        self.owner_open_id = owner_open_id
        self.now = now

    def get_by_open_id(self, open_id: str) -> User | None:
        stmt = select(User).where(User.open_id == open_id).limit(1)
        with translate_store_errors(self.db, "load user"):
            return self.db.scalars(stmt).first()

    def upsert(self, open_id: str, fields: Mapping[str, Any]) -> WriteOutcome:
        """Create or patch a user by open id.

        Raises ``ValidationError`` for a blank open id. Store problems are
        returned, not raised: unreachable store is a soft failure, a rejected
        write a hard one.
        """
        plan = plan_user_upsert(
            open_id, fields, owner_open_id=self.owner_open_id, now=self.now
        )
        try:
            user = apply_upsert(self.db, User, "open_id", plan)
        except StoreUnavailableError as exc:
            logger.warning("Cannot upsert user %s: database not available", open_id)
            return WriteOutcome.soft_failure(exc)
        except KaptanError as exc:
            logger.error("Failed to upsert user %s: %s", open_id, exc)
            return WriteOutcome.hard_failure(exc)
        return WriteOutcome.success(user)
