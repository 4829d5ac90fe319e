"""Application settings."""

from __future__ import annotations

import json
from typing import Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ONE_YEAR_SECONDS = 60 * 60 * 24 * 365


class Settings(BaseSettings):
    """Central configuration entrypoint for the API."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Environment
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = True
    log_level: str = "INFO"

    # CORS; the public frontend is hosted on a separate origin
    allowed_origins: list[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    # Database
    database_url: str = Field(
        default="sqlite:///./data/kaptan.db",
        validation_alias=AliasChoices("DATABASE_URL"),
    )
    db_echo: bool = Field(
        default=False,
        validation_alias=AliasChoices("DB_ECHO", "SQL_ECHO"),
    )

    # Session
    secret_key: str = Field(
        default="dev-secret-change-me-in-production",
        validation_alias=AliasChoices("JWT_SECRET", "SECRET_KEY"),
    )
    session_cookie_name: str = "app_session_id"
    session_lifetime_seconds: int = ONE_YEAR_SECONDS
    session_cookie_domain: str | None = None

    # Admin login
    owner_open_id: str = "admin@localhost.dev"
    admin_username: str = "admin"
    admin_password: str = "admin123"

    # Media storage (S3). Unset bucket means placeholder mode.
    media_bucket: str | None = None
    media_cdn_base_url: str = ""
    media_region: str = "eu-central-1"
    max_upload_bytes: int = 10 * 1024 * 1024

    # Metrics endpoint authentication
    metrics_username: str = "prometheus"
    metrics_password: str | None = None

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def parse_allowed_origins(cls, value: str | list[str] | None) -> list[str]:
        """Normalize ALLOWED_ORIGINS env input into a list."""
        if isinstance(value, list):
            return value
        if isinstance(value, str):
            raw = value.strip()
            if not raw:
                return []
            if raw.startswith("["):
                try:
                    parsed = json.loads(raw)
                    if isinstance(parsed, list):
                        return parsed
                except json.JSONDecodeError:
                    pass
            return [item.strip() for item in raw.split(",") if item.strip()]
        return []

    @field_validator("session_cookie_domain", "media_bucket", mode="before")
    @classmethod
    def blank_as_none(cls, value: str | None) -> str | None:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def is_production(self) -> bool:
        """Return True when running in production."""
        return self.environment == "production"

    @property
    def storage_configured(self) -> bool:
        return bool(self.media_bucket)


settings = Settings()
