"""One repository per entity, each bound to a request-scoped session."""

from kaptan.repositories.content import (
    CaravanRouteRepository,
    CategoryRepository,
    PageRepository,
    PostRepository,
)
from kaptan.repositories.homepage import (
    FeatureCardRepository,
    HeroSectionRepository,
    TeamMemberRepository,
)
from kaptan.repositories.media import MediaRepository
from kaptan.repositories.upserts import SiteSettingRepository, UserRepository

__all__ = [
    "CaravanRouteRepository",
    "CategoryRepository",
    "FeatureCardRepository",
    "HeroSectionRepository",
    "MediaRepository",
    "PageRepository",
    "PostRepository",
    "SiteSettingRepository",
    "TeamMemberRepository",
    "UserRepository",
]
