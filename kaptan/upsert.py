"""Create-or-update-by-natural-key planning.

A partial field mapping distinguishes three states per field:

* key missing: leave the stored value untouched (and omit it from inserts)
* value ``None``: clear the stored value
* any other value: write it

:func:`plan_upsert` turns such a mapping into the values used for an insert
and the SET clause used for an update, so repositories only have to decide
which of the two to apply.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from kaptan.errors import ValidationError
from kaptan.models.user import ROLE_ADMIN

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(slots=True)
class UpsertPlan:
    insert_values: dict[str, Any] = field(default_factory=dict)
    update_set: dict[str, Any] = field(default_factory=dict)


def plan_upsert(
    key_field: str,
    key_value: Any,
    fields: Mapping[str, Any],
    *,
    derived: Mapping[str, Any] | None = None,
    touch_field: str | None = None,
    now: Clock = utcnow,
) -> UpsertPlan:
    """Build insert values and an update SET clause for a natural-key upsert.

    Args:
        key_field: Name of the natural-key column.
        key_value: Natural-key value; must be non-empty.
        fields: Partial field mapping supplied by the caller.
        derived: Defaults applied to both maps for fields the caller did not
            supply.
        touch_field: Timestamp column that gets ``now()`` on insert when not
            supplied, and on update when nothing else would change.
        now: Clock used for ``touch_field``.

    Raises:
        ValidationError: If the natural key is missing or blank.
    """
    if key_value is None or (isinstance(key_value, str) and not key_value.strip()):
        raise ValidationError(f"{key_field} is required for upsert")

    plan = UpsertPlan(insert_values={key_field: key_value})
    for name, value in fields.items():
        if name == key_field:
            continue
        plan.insert_values[name] = value
        plan.update_set[name] = value

    for name, value in (derived or {}).items():
        if name in fields:
            continue
        plan.insert_values[name] = value
        plan.update_set[name] = value

    if touch_field is not None:
        stamp = now()
        if plan.insert_values.get(touch_field) is None:
            plan.insert_values[touch_field] = stamp
        if not plan.update_set:
            plan.update_set[touch_field] = stamp

    return plan


def is_owner_identity(open_id: str | None, owner_open_id: str | None) -> bool:
    """Whether ``open_id`` is the operator-configured owner."""
    return bool(owner_open_id) and open_id == owner_open_id


def plan_user_upsert(
    open_id: str,
    fields: Mapping[str, Any],
    *,
    owner_open_id: str | None,
    now: Clock = utcnow,
) -> UpsertPlan:
    """Plan a user upsert; the owner is promoted unless a role was given."""
    derived: dict[str, Any] = {}
    if is_owner_identity(open_id, owner_open_id):
        derived["role"] = ROLE_ADMIN
    return plan_upsert(
        "open_id",
        open_id,
        fields,
        derived=derived,
        touch_field="last_signed_in",
        now=now,
    )
