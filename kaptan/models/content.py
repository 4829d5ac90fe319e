"""Sluggable content: categories, posts, caravan routes and static pages."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    false,
    true,
)
from sqlalchemy.orm import Mapped, mapped_column

from kaptan.database import Base
from kaptan.models.mixins import TimestampMixin


class Category(TimestampMixin, Base):
    """Top-level section such as Denizcilik or Karavan."""

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(255))
    slug: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    icon: Mapped[str | None] = mapped_column(String(100), nullable=True)
    color: Mapped[str | None] = mapped_column(String(50), nullable=True)
    sort_order: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
    is_active: Mapped[bool] = mapped_column(
        Boolean, default=True, server_default=true(), index=True
    )


class Post(TimestampMixin, Base):
    """Blog post. ``content`` holds HTML produced by the admin editor."""

    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(500))
    slug: Mapped[str] = mapped_column(String(500), unique=True, index=True)
    excerpt: Mapped[str | None] = mapped_column(Text, nullable=True)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    featured_image: Mapped[str | None] = mapped_column(Text, nullable=True)
    author_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    author_title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    author_image: Mapped[str | None] = mapped_column(Text, nullable=True)
    category_id: Mapped[int | None] = mapped_column(
        ForeignKey("categories.id", ondelete="SET NULL"), nullable=True, index=True
    )
    read_time: Mapped[int] = mapped_column(Integer, default=5, server_default="5")
    view_count: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
    is_published: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=false(), index=True
    )
    is_featured: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=false()
    )
    meta_title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    meta_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    published_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, index=True
    )


class CaravanRoute(TimestampMixin, Base):
    __tablename__ = "caravan_routes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(255))
    slug: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    featured_image: Mapped[str | None] = mapped_column(Text, nullable=True)
    distance: Mapped[str | None] = mapped_column(String(50), nullable=True)  # "450 km"
    duration: Mapped[str | None] = mapped_column(String(50), nullable=True)  # "7 gün"
    difficulty: Mapped[str] = mapped_column(
        String(10), default="medium", server_default="medium"
    )
    locations: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    highlights: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    tips: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    gallery: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    map_coordinates: Mapped[list[dict[str, Any]] | None] = mapped_column(
        JSON, nullable=True
    )
    is_published: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=false(), index=True
    )
    is_featured: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=false()
    )
    meta_title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    meta_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    view_count: Mapped[int] = mapped_column(Integer, default=0, server_default="0")


class Page(TimestampMixin, Base):
    """Static page such as Hakkımızda or İletişim."""

    __tablename__ = "pages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(255))
    slug: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    featured_image: Mapped[str | None] = mapped_column(Text, nullable=True)
    template: Mapped[str] = mapped_column(
        String(50), default="default", server_default="default"
    )
    is_published: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=false(), index=True
    )
    meta_title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    meta_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    sort_order: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
