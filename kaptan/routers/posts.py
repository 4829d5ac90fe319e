from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from kaptan.auth import AccessContext, get_access_context, require_admin
from kaptan.database import get_db
from kaptan.repositories import PostRepository
from kaptan.routers.common import RPC_PREFIX, visible_only
from kaptan.schemas.common import IdInput, IdResult, SuccessResult
from kaptan.schemas.content import PostCreate, PostOut, PostUpdate

router = APIRouter(prefix=RPC_PREFIX, tags=["posts"])


@router.get("/posts.list", response_model=list[PostOut])
def list_posts(
    published_only: bool | None = None,
    limit: int | None = Query(None, ge=1, le=100),
    db: Session = Depends(get_db),
    ctx: AccessContext = Depends(get_access_context),
):
    return PostRepository(db).list(
        visible_only=visible_only(published_only, ctx), limit=limit
    )


@router.get("/posts.getById", response_model=PostOut | None)
def get_post(
    id: int,
    db: Session = Depends(get_db),
    ctx: AccessContext = Depends(get_access_context),
):
    return PostRepository(db).get_by_id(id, visible_only=not ctx.is_admin)


@router.get("/posts.getBySlug", response_model=PostOut | None)
def get_post_by_slug(
    slug: str,
    db: Session = Depends(get_db),
    ctx: AccessContext = Depends(get_access_context),
):
    """Post detail. Every call counts one view."""
    return PostRepository(db).get_by_slug_and_count_view(
        slug, visible_only=not ctx.is_admin
    )


@router.get("/posts.getByCategory", response_model=list[PostOut])
def list_posts_by_category(
    category_id: int,
    published_only: bool | None = None,
    db: Session = Depends(get_db),
    ctx: AccessContext = Depends(get_access_context),
):
    return PostRepository(db).list_by_category(
        category_id, visible_only=visible_only(published_only, ctx)
    )


@router.get("/posts.getFeatured", response_model=list[PostOut])
def list_featured_posts(
    limit: int = Query(3, ge=1, le=24),
    db: Session = Depends(get_db),
):
    return PostRepository(db).list_featured(limit)


@router.post(
    "/posts.create", response_model=IdResult, dependencies=[Depends(require_admin)]
)
def create_post(payload: PostCreate, db: Session = Depends(get_db)):
    return IdResult(id=PostRepository(db).create(payload.supplied()))


@router.post(
    "/posts.update", response_model=SuccessResult, dependencies=[Depends(require_admin)]
)
def update_post(payload: PostUpdate, db: Session = Depends(get_db)):
    PostRepository(db).update(payload.id, payload.supplied())
    return SuccessResult()


@router.post(
    "/posts.delete", response_model=SuccessResult, dependencies=[Depends(require_admin)]
)
def delete_post(payload: IdInput, db: Session = Depends(get_db)):
    PostRepository(db).delete(payload.id)
    return SuccessResult()
