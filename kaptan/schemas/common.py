"""Shared request/response shapes for the RPC procedures."""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, model_validator


class OrmModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class InputModel(BaseModel):
    model_config = ConfigDict(use_enum_values=True, extra="forbid")

    def supplied(self) -> dict[str, Any]:
        """Only the fields the caller actually sent."""
        return self.model_dump(exclude_unset=True)


class PartialUpdate(InputModel):
    """Update payload: ``id`` plus any subset of the entity's fields.

    Columns listed in ``non_nullable`` may be omitted but not set to null.
    """

    id: int
    non_nullable: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="after")
    def _reject_null_required(self):
        for name in self.non_nullable:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def supplied(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True, exclude={"id"})


class IdInput(BaseModel):
    id: int


class IdResult(BaseModel):
    id: int


class SuccessResult(BaseModel):
    success: bool = True


