"""Schemas for categories, posts, caravan routes and pages."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import ClassVar

from pydantic import BaseModel, Field

from kaptan.schemas.common import InputModel, OrmModel, PartialUpdate


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class MapPoint(BaseModel):
    lat: float
    lng: float
    label: str | None = None


# ==========================================
# Categories
# ==========================================
class CategoryCreate(InputModel):
    name: str = Field(..., min_length=1, max_length=255)
    slug: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    icon: str | None = None
    color: str | None = None
    sort_order: int | None = None
    is_active: bool | None = None


class CategoryUpdate(PartialUpdate):
    non_nullable: ClassVar[frozenset[str]] = frozenset(
        {"name", "slug", "sort_order", "is_active"}
    )

    name: str | None = Field(None, min_length=1, max_length=255)
    slug: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    icon: str | None = None
    color: str | None = None
    sort_order: int | None = None
    is_active: bool | None = None


class CategoryOut(OrmModel):
    id: int
    name: str
    slug: str
    description: str | None
    icon: str | None
    color: str | None
    sort_order: int
    is_active: bool
    created_at: datetime
    updated_at: datetime


# ==========================================
# Posts
# ==========================================
class PostCreate(InputModel):
    title: str = Field(..., min_length=1, max_length=500)
    # Derived from the title when omitted.
    slug: str | None = Field(None, min_length=1, max_length=500)
    excerpt: str | None = None
    content: str | None = None
    featured_image: str | None = None
    author_name: str | None = None
    author_title: str | None = None
    author_image: str | None = None
    category_id: int | None = None
    read_time: int | None = Field(None, ge=1)
    is_published: bool | None = None
    is_featured: bool | None = None
    meta_title: str | None = None
    meta_description: str | None = None
    published_at: datetime | None = None


class PostUpdate(PartialUpdate):
    non_nullable: ClassVar[frozenset[str]] = frozenset(
        {"title", "slug", "read_time", "is_published", "is_featured"}
    )

    title: str | None = Field(None, min_length=1, max_length=500)
    slug: str | None = Field(None, min_length=1, max_length=500)
    excerpt: str | None = None
    content: str | None = None
    featured_image: str | None = None
    author_name: str | None = None
    author_title: str | None = None
    author_image: str | None = None
    category_id: int | None = None
    read_time: int | None = Field(None, ge=1)
    is_published: bool | None = None
    is_featured: bool | None = None
    meta_title: str | None = None
    meta_description: str | None = None
    published_at: datetime | None = None


class PostOut(OrmModel):
    id: int
    title: str
    slug: str
    excerpt: str | None
    content: str | None
    featured_image: str | None
    author_name: str | None
    author_title: str | None
    author_image: str | None
    category_id: int | None
    read_time: int
    view_count: int
    is_published: bool
    is_featured: bool
    meta_title: str | None
    meta_description: str | None
    published_at: datetime | None
    created_at: datetime
    updated_at: datetime


# ==========================================
# Caravan routes
# ==========================================
class CaravanRouteCreate(InputModel):
    name: str = Field(..., min_length=1, max_length=255)
    slug: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    content: str | None = None
    featured_image: str | None = None
    distance: str | None = None
    duration: str | None = None
    difficulty: Difficulty | None = None
    locations: list[str] | None = None
    highlights: list[str] | None = None
    tips: list[str] | None = None
    gallery: list[str] | None = None
    map_coordinates: list[MapPoint] | None = None
    is_published: bool | None = None
    is_featured: bool | None = None
    meta_title: str | None = None
    meta_description: str | None = None


class CaravanRouteUpdate(PartialUpdate):
    non_nullable: ClassVar[frozenset[str]] = frozenset(
        {"name", "slug", "difficulty", "is_published", "is_featured"}
    )

    name: str | None = Field(None, min_length=1, max_length=255)
    slug: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    content: str | None = None
    featured_image: str | None = None
    distance: str | None = None
    duration: str | None = None
    difficulty: Difficulty | None = None
    locations: list[str] | None = None
    highlights: list[str] | None = None
    tips: list[str] | None = None
    gallery: list[str] | None = None
    map_coordinates: list[MapPoint] | None = None
    is_published: bool | None = None
    is_featured: bool | None = None
    meta_title: str | None = None
    meta_description: str | None = None


class CaravanRouteOut(OrmModel):
    id: int
    name: str
    slug: str
    description: str | None
    content: str | None
    featured_image: str | None
    distance: str | None
    duration: str | None
    difficulty: Difficulty
    locations: list[str] | None
    highlights: list[str] | None
    tips: list[str] | None
    gallery: list[str] | None
    map_coordinates: list[MapPoint] | None
    is_published: bool
    is_featured: bool
    meta_title: str | None
    meta_description: str | None
    view_count: int
    created_at: datetime
    updated_at: datetime


# ==========================================
# Pages
# ==========================================
class PageCreate(InputModel):
    title: str = Field(..., min_length=1, max_length=255)
    slug: str = Field(..., min_length=1, max_length=255)
    content: str | None = None
    featured_image: str | None = None
    template: str | None = Field(None, max_length=50)
    is_published: bool | None = None
    meta_title: str | None = None
    meta_description: str | None = None
    sort_order: int | None = None


class PageUpdate(PartialUpdate):
    non_nullable: ClassVar[frozenset[str]] = frozenset(
        {"title", "slug", "template", "is_published", "sort_order"}
    )

    title: str | None = Field(None, min_length=1, max_length=255)
    slug: str | None = Field(None, min_length=1, max_length=255)
    content: str | None = None
    featured_image: str | None = None
    template: str | None = Field(None, max_length=50)
    is_published: bool | None = None
    meta_title: str | None = None
    meta_description: str | None = None
    sort_order: int | None = None


class PageOut(OrmModel):
    id: int
    title: str
    slug: str
    content: str | None
    featured_image: str | None
    template: str
    is_published: bool
    meta_title: str | None
    meta_description: str | None
    sort_order: int
    created_at: datetime
    updated_at: datetime
