"""Read-only aggregates for the public homepage and the admin dashboard."""

from __future__ import annotations

from sqlalchemy.orm import Session

from kaptan.repositories import (
    CaravanRouteRepository,
    CategoryRepository,
    FeatureCardRepository,
    HeroSectionRepository,
    PageRepository,
    PostRepository,
    SiteSettingRepository,
)
from kaptan.schemas.dashboard import DashboardStats, HomepageData

FEATURED_LIMIT = 3


def homepage_data(db: Session) -> HomepageData:
    """Active hero, active feature cards, featured content and settings."""
    return HomepageData.model_validate(
        {
            "hero": HeroSectionRepository(db).get_active(),
            "features": FeatureCardRepository(db).list(visible_only=True),
            "posts": PostRepository(db).list_featured(FEATURED_LIMIT),
            "routes": CaravanRouteRepository(db).list_featured(FEATURED_LIMIT),
            "settings": SiteSettingRepository(db).as_mapping(),
        },
        from_attributes=True,
    )


def dashboard_stats(db: Session) -> DashboardStats:
    return DashboardStats(
        posts=PostRepository(db).count(),
        routes=CaravanRouteRepository(db).count(),
        categories=CategoryRepository(db).count(),
        pages=PageRepository(db).count(),
    )
