"""Curated homepage and about-page blocks."""

from __future__ import annotations

from sqlalchemy import JSON, Boolean, Integer, String, Text, true
from sqlalchemy.orm import Mapped, mapped_column

from kaptan.database import Base
from kaptan.models.mixins import TimestampMixin


class HeroSection(TimestampMixin, Base):
    __tablename__ = "hero_sections"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(255))
    subtitle: Mapped[str | None] = mapped_column(Text, nullable=True)
    background_image: Mapped[str | None] = mapped_column(Text, nullable=True)
    primary_button_text: Mapped[str | None] = mapped_column(String(100), nullable=True)
    primary_button_link: Mapped[str | None] = mapped_column(String(255), nullable=True)
    secondary_button_text: Mapped[str | None] = mapped_column(
        String(100), nullable=True
    )
    secondary_button_link: Mapped[str | None] = mapped_column(
        String(255), nullable=True
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, default=True, server_default=true(), index=True
    )
    sort_order: Mapped[int] = mapped_column(Integer, default=0, server_default="0")


class FeatureCard(TimestampMixin, Base):
    __tablename__ = "feature_cards"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(255))
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    icon: Mapped[str | None] = mapped_column(String(100), nullable=True)  # RemixIcon
    color: Mapped[str | None] = mapped_column(String(50), nullable=True)
    link: Mapped[str | None] = mapped_column(String(255), nullable=True)
    sort_order: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
    is_active: Mapped[bool] = mapped_column(
        Boolean, default=True, server_default=true(), index=True
    )


class TeamMember(TimestampMixin, Base):
    __tablename__ = "team_members"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(255))
    title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    image: Mapped[str | None] = mapped_column(Text, nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    # {"instagram": url, "twitter": url, ...}
    social_links: Mapped[dict[str, str] | None] = mapped_column(JSON, nullable=True)
    sort_order: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
    is_active: Mapped[bool] = mapped_column(
        Boolean, default=True, server_default=true(), index=True
    )
