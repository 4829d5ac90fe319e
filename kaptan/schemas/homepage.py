"""Schemas for hero sections, feature cards and team members."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar

from pydantic import Field

from kaptan.schemas.common import InputModel, OrmModel, PartialUpdate


class HeroSectionCreate(InputModel):
    title: str = Field(..., min_length=1, max_length=255)
    subtitle: str | None = None
    background_image: str | None = None
    primary_button_text: str | None = Field(None, max_length=100)
    primary_button_link: str | None = Field(None, max_length=255)
    secondary_button_text: str | None = Field(None, max_length=100)
    secondary_button_link: str | None = Field(None, max_length=255)
    is_active: bool | None = None
    sort_order: int | None = None


class HeroSectionUpdate(PartialUpdate):
    non_nullable: ClassVar[frozenset[str]] = frozenset(
        {"title", "is_active", "sort_order"}
    )

    title: str | None = Field(None, min_length=1, max_length=255)
    subtitle: str | None = None
    background_image: str | None = None
    primary_button_text: str | None = Field(None, max_length=100)
    primary_button_link: str | None = Field(None, max_length=255)
    secondary_button_text: str | None = Field(None, max_length=100)
    secondary_button_link: str | None = Field(None, max_length=255)
    is_active: bool | None = None
    sort_order: int | None = None


class HeroSectionOut(OrmModel):
    id: int
    title: str
    subtitle: str | None
    background_image: str | None
    primary_button_text: str | None
    primary_button_link: str | None
    secondary_button_text: str | None
    secondary_button_link: str | None
    is_active: bool
    sort_order: int
    created_at: datetime
    updated_at: datetime


class FeatureCardCreate(InputModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    icon: str | None = Field(None, max_length=100)
    color: str | None = Field(None, max_length=50)
    link: str | None = Field(None, max_length=255)
    sort_order: int | None = None
    is_active: bool | None = None


class FeatureCardUpdate(PartialUpdate):
    non_nullable: ClassVar[frozenset[str]] = frozenset(
        {"title", "is_active", "sort_order"}
    )

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    icon: str | None = Field(None, max_length=100)
    color: str | None = Field(None, max_length=50)
    link: str | None = Field(None, max_length=255)
    sort_order: int | None = None
    is_active: bool | None = None


class FeatureCardOut(OrmModel):
    id: int
    title: str
    description: str | None
    icon: str | None
    color: str | None
    link: str | None
    sort_order: int
    is_active: bool
    created_at: datetime
    updated_at: datetime


class TeamMemberCreate(InputModel):
    name: str = Field(..., min_length=1, max_length=255)
    title: str | None = Field(None, max_length=255)
    bio: str | None = None
    image: str | None = None
    email: str | None = Field(None, max_length=255)
    social_links: dict[str, str] | None = None
    sort_order: int | None = None
    is_active: bool | None = None


class TeamMemberUpdate(PartialUpdate):
    non_nullable: ClassVar[frozenset[str]] = frozenset(
        {"name", "is_active", "sort_order"}
    )

    name: str | None = Field(None, min_length=1, max_length=255)
    title: str | None = Field(None, max_length=255)
    bio: str | None = None
    image: str | None = None
    email: str | None = Field(None, max_length=255)
    social_links: dict[str, str] | None = None
    sort_order: int | None = None
    is_active: bool | None = None


class TeamMemberOut(OrmModel):
    id: int
    name: str
    title: str | None
    bio: str | None
    image: str | None
    email: str | None
    social_links: dict[str, str] | None
    sort_order: int
    is_active: bool
    created_at: datetime
    updated_at: datetime
