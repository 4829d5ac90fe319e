from __future__ import annotations

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from kaptan.database import Base
from kaptan.models.mixins import TimestampMixin


class SiteSetting(TimestampMixin, Base):
    """Flat key/value site configuration.

    ``group`` is a loose namespace (general, contact, social, seo) used by the
    admin UI; ``type`` tells the UI which editor to render.
    """

    __tablename__ = "site_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    key: Mapped[str] = mapped_column(String(100), unique=True, index=True)
    value: Mapped[str | None] = mapped_column(Text, nullable=True)
    type: Mapped[str] = mapped_column(String(20), default="text", server_default="text")
    group: Mapped[str | None] = mapped_column(String(50), nullable=True, index=True)
    label: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
