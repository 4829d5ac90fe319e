from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from kaptan.schemas.common import OrmModel


class UserRead(OrmModel):
    id: int
    open_id: str
    name: str | None
    email: str | None
    login_method: str | None
    role: str
    last_signed_in: datetime
    created_at: datetime


class AdminLogin(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
