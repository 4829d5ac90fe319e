"""Repositories for sluggable content."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import select, update

from kaptan.models import CaravanRoute, Category, Page, Post
from kaptan.repositories.base import Repository, translate_store_errors
from kaptan.services.content import estimate_read_time, generate_slug


class CategoryRepository(Repository[Category]):
    model = Category
    visibility_column = "is_active"
    sluggable = True

    def ordering(self):
        return (Category.sort_order.asc(), Category.id.asc())


class PostRepository(Repository[Post]):
    model = Post
    visibility_column = "is_published"
    sluggable = True

    def ordering(self):
        return (
            Post.published_at.desc().nulls_last(),
            Post.created_at.desc(),
            Post.id.desc(),
        )

    def prepare_create(self, fields: dict[str, Any]) -> dict[str, Any]:
        if not fields.get("slug"):
            fields["slug"] = generate_slug(fields["title"])
        if "read_time" not in fields and fields.get("content"):
            fields["read_time"] = estimate_read_time(fields["content"])
        if fields.get("is_published") and not fields.get("published_at"):
            fields["published_at"] = datetime.now(UTC)
        return fields

    def prepare_update(self, entity: Post, fields: dict[str, Any]) -> dict[str, Any]:
        publishing = fields.get("is_published") is True
        if publishing and "published_at" not in fields and entity.published_at is None:
            fields["published_at"] = datetime.now(UTC)
        return fields

    def list_by_category(self, category_id: int, *, visible_only: bool = True) -> list[Post]:
        stmt = self._visible(
            select(Post).where(Post.category_id == category_id), visible_only
        ).order_by(*self.ordering())
        with translate_store_errors(self.db, "list posts by category"):
            return list(self.db.scalars(stmt).all())

    def list_featured(self, limit: int = 3) -> list[Post]:
        stmt = (
            select(Post)
            .where(Post.is_featured.is_(True), Post.is_published.is_(True))
            .order_by(*self.ordering())
            .limit(limit)
        )
        with translate_store_errors(self.db, "list featured posts"):
            return list(self.db.scalars(stmt).all())

    def increment_view_count(self, post_id: int) -> None:
        """Atomic ``view_count + 1`` in the store; no read-modify-write."""
        with translate_store_errors(self.db, "count post view"):
            self.db.execute(
                update(Post)
                .where(Post.id == post_id)
                .values(view_count=Post.view_count + 1)
                .execution_options(synchronize_session=False)
            )
            self.db.commit()

    def get_by_slug_and_count_view(
        self, slug: str, *, visible_only: bool = True
    ) -> Post | None:
        """Fetch a post for display, counting one view per call."""
        post = self.get_by_slug(slug, visible_only=visible_only)
        if post is None:
            return None
        self.increment_view_count(post.id)
        self.db.refresh(post)
        return post


class CaravanRouteRepository(Repository[CaravanRoute]):
    model = CaravanRoute
    visibility_column = "is_published"
    sluggable = True

    def ordering(self):
        return (CaravanRoute.created_at.desc(), CaravanRoute.id.desc())

    def list_featured(self, limit: int = 3) -> list[CaravanRoute]:
        stmt = (
            select(CaravanRoute)
            .where(
                CaravanRoute.is_featured.is_(True),
                CaravanRoute.is_published.is_(True),
            )
            .order_by(*self.ordering())
            .limit(limit)
        )
        with translate_store_errors(self.db, "list featured routes"):
            return list(self.db.scalars(stmt).all())


class PageRepository(Repository[Page]):
    model = Page
    visibility_column = "is_published"
    sluggable = True

    def ordering(self):
        return (Page.sort_order.asc(), Page.id.asc())
