"""Site settings schemas."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import Field

from kaptan.schemas.common import InputModel, OrmModel


class SettingType(str, Enum):
    TEXT = "text"
    TEXTAREA = "textarea"
    IMAGE = "image"
    JSON = "json"
    BOOLEAN = "boolean"


class SiteSettingUpsert(InputModel):
    key: str = Field(..., min_length=1, max_length=100)
    value: str | None = None
    type: SettingType | None = None
    group: str | None = Field(None, max_length=50)
    label: str | None = Field(None, max_length=255)
    description: str | None = None

    def supplied(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude={"key"})


class SiteSettingOut(OrmModel):
    id: int
    key: str
    value: str | None
    type: SettingType
    group: str | None
    label: str | None
    description: str | None
    created_at: datetime
    updated_at: datetime
