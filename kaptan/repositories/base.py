"""Generic CRUD repository over a SQLAlchemy session."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.exc import (
    DisconnectionError,
    IntegrityError,
    InterfaceError,
    OperationalError,
)
from sqlalchemy.orm import Session

from kaptan.database import Base
from kaptan.errors import (
    DuplicateKeyError,
    NotFound,
    StoreUnavailableError,
    ValidationError,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


@contextmanager
def translate_store_errors(db: Session, action: str) -> Iterator[None]:
    """Map driver failures onto the API error taxonomy, rolling back first."""
    try:
        yield
    except IntegrityError as exc:
        db.rollback()
        detail = str(exc.orig).lower()
        if "unique" in detail or "duplicate" in detail:
            raise DuplicateKeyError(f"Cannot {action}: key already exists") from exc
        raise ValidationError(f"Cannot {action}: constraint violated") from exc
    except (OperationalError, InterfaceError, DisconnectionError) as exc:
        db.rollback()
        logger.error("Database unavailable during %s: %s", action, exc)
        raise StoreUnavailableError() from exc


class Repository(Generic[ModelT]):
    """List/get/create/update/delete for one table.

    Subclasses set ``model``, the optional ``visibility_column`` used for
    public filtering, and ``ordering`` for listings.
    """

    model: ClassVar[type[Base]]
    visibility_column: ClassVar[str | None] = None
    sluggable: ClassVar[bool] = False

    def __init__(self, db: Session):
        self.db = db

    # ------------------------------------------------------------------
    # Query helpers
    # ------------------------------------------------------------------
    def ordering(self) -> Sequence[ColumnElement[Any]]:
        return (self.model.id.asc(),)

    def _visible(self, stmt, visible_only: bool):
        if visible_only and self.visibility_column:
            stmt = stmt.where(getattr(self.model, self.visibility_column).is_(True))
        return stmt

    def _name(self) -> str:
        return self.model.__tablename__

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def list(self, *, visible_only: bool = False, limit: int | None = None) -> list[ModelT]:
        stmt = self._visible(select(self.model), visible_only).order_by(
            *self.ordering()
        )
        if limit:
            stmt = stmt.limit(limit)
        with translate_store_errors(self.db, f"list {self._name()}"):
            return list(self.db.scalars(stmt).all())

    def get_by_id(self, entity_id: int, *, visible_only: bool = False) -> ModelT | None:
        stmt = self._visible(
            select(self.model).where(self.model.id == entity_id), visible_only
        )
        with translate_store_errors(self.db, f"load {self._name()}"):
            return self.db.scalars(stmt.limit(1)).first()

    def get_by_slug(self, slug: str, *, visible_only: bool = False) -> ModelT | None:
        if not self.sluggable:
            raise TypeError(f"{self._name()} has no slug")
        stmt = self._visible(
            select(self.model).where(self.model.slug == slug), visible_only
        )
        with translate_store_errors(self.db, f"load {self._name()}"):
            return self.db.scalars(stmt.limit(1)).first()

    def count(self) -> int:
        with translate_store_errors(self.db, f"count {self._name()}"):
            return self.db.scalar(select(func.count()).select_from(self.model)) or 0

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def prepare_create(self, fields: dict[str, Any]) -> dict[str, Any]:
        """Hook for derived values on insert."""
        return fields

    def prepare_update(self, entity: ModelT, fields: dict[str, Any]) -> dict[str, Any]:
        """Hook for derived values on update."""
        return fields

    def create(self, fields: Mapping[str, Any]) -> int:
        # On insert an explicit null means "use the column default".
        values = {name: value for name, value in fields.items() if value is not None}
        entity = self.model(**self.prepare_create(values))
        with translate_store_errors(self.db, f"create {self._name()}"):
            self.db.add(entity)
            self.db.commit()
            self.db.refresh(entity)
        logger.info("Created %s id=%s", self._name(), entity.id)
        return entity.id

    def update(self, entity_id: int, fields: Mapping[str, Any]) -> bool:
        with translate_store_errors(self.db, f"update {self._name()}"):
            entity = self.db.get(self.model, entity_id)
            if entity is None:
                raise NotFound(f"{self._name()} {entity_id} not found")
            for name, value in self.prepare_update(entity, dict(fields)).items():
                setattr(entity, name, value)
            self.db.commit()
        logger.info("Updated %s id=%s fields=%s", self._name(), entity_id, sorted(fields))
        return True

    def delete(self, entity_id: int) -> bool:
        with translate_store_errors(self.db, f"delete {self._name()}"):
            entity = self.db.get(self.model, entity_id)
            if entity is None:
                raise NotFound(f"{self._name()} {entity_id} not found")
            self.db.delete(entity)
            self.db.commit()
        logger.info("Deleted %s id=%s", self._name(), entity_id)
        return True
