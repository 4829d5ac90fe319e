"""Aggregated read models for the homepage and admin dashboard."""

from __future__ import annotations

from pydantic import BaseModel

from kaptan.schemas.content import CaravanRouteOut, PostOut
from kaptan.schemas.homepage import FeatureCardOut, HeroSectionOut


class HomepageData(BaseModel):
    hero: HeroSectionOut | None
    features: list[FeatureCardOut]
    posts: list[PostOut]
    routes: list[CaravanRouteOut]
    settings: dict[str, str]


class DashboardStats(BaseModel):
    posts: int = 0
    routes: int = 0
    categories: int = 0
    pages: int = 0
