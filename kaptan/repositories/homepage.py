"""Repositories for curated homepage blocks."""

from __future__ import annotations

from sqlalchemy import select

from kaptan.models import FeatureCard, HeroSection, TeamMember
from kaptan.repositories.base import Repository, translate_store_errors


class HeroSectionRepository(Repository[HeroSection]):
    model = HeroSection
    visibility_column = "is_active"

    def ordering(self):
        return (HeroSection.sort_order.asc(), HeroSection.id.asc())

    def get_active(self) -> HeroSection | None:
        """First active hero by sort order."""
        stmt = (
            select(HeroSection)
            .where(HeroSection.is_active.is_(True))
            .order_by(*self.ordering())
            .limit(1)
        )
        with translate_store_errors(self.db, "load active hero"):
            return self.db.scalars(stmt).first()


class FeatureCardRepository(Repository[FeatureCard]):
    model = FeatureCard
    visibility_column = "is_active"

    def ordering(self):
        return (FeatureCard.sort_order.asc(), FeatureCard.id.asc())


class TeamMemberRepository(Repository[TeamMember]):
    model = TeamMember
    visibility_column = "is_active"

    def ordering(self):
        return (TeamMember.sort_order.asc(), TeamMember.id.asc())
