"""Media upload and metadata schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from kaptan.schemas.common import InputModel, OrmModel


class MediaUpload(InputModel):
    filename: str = Field(..., min_length=1, max_length=255)
    base64: str = Field(..., min_length=1)
    mime_type: str = Field(..., min_length=1, max_length=100)
    alt: str | None = Field(None, max_length=255)
    caption: str | None = None


class MediaUploadResult(BaseModel):
    id: int
    url: str


class MediaOut(OrmModel):
    id: int
    filename: str
    original_name: str | None
    mime_type: str | None
    size: int | None
    url: str
    storage_key: str | None
    alt: str | None
    caption: str | None
    uploaded_by: int | None
    created_at: datetime
