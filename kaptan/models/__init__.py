"""ORM models; importing this package registers every table."""

from kaptan.models.content import CaravanRoute, Category, Page, Post
from kaptan.models.homepage import FeatureCard, HeroSection, TeamMember
from kaptan.models.media import Media
from kaptan.models.site_setting import SiteSetting
from kaptan.models.user import ROLE_ADMIN, ROLE_USER, User

__all__ = [
    "ROLE_ADMIN",
    "ROLE_USER",
    "CaravanRoute",
    "Category",
    "FeatureCard",
    "HeroSection",
    "Media",
    "Page",
    "Post",
    "SiteSetting",
    "TeamMember",
    "User",
]
