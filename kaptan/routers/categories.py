from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from kaptan.auth import AccessContext, get_access_context, require_admin
from kaptan.database import get_db
from kaptan.repositories import CategoryRepository
from kaptan.routers.common import RPC_PREFIX, visible_only
from kaptan.schemas.common import IdInput, IdResult, SuccessResult
from kaptan.schemas.content import CategoryCreate, CategoryOut, CategoryUpdate

router = APIRouter(prefix=RPC_PREFIX, tags=["categories"])


@router.get("/categories.list", response_model=list[CategoryOut])
def list_categories(
    active_only: bool | None = None,
    db: Session = Depends(get_db),
    ctx: AccessContext = Depends(get_access_context),
):
    return CategoryRepository(db).list(visible_only=visible_only(active_only, ctx))


@router.get("/categories.getById", response_model=CategoryOut | None)
def get_category(
    id: int,
    db: Session = Depends(get_db),
    ctx: AccessContext = Depends(get_access_context),
):
    return CategoryRepository(db).get_by_id(id, visible_only=not ctx.is_admin)


@router.get("/categories.getBySlug", response_model=CategoryOut | None)
def get_category_by_slug(
    slug: str,
    db: Session = Depends(get_db),
    ctx: AccessContext = Depends(get_access_context),
):
    return CategoryRepository(db).get_by_slug(slug, visible_only=not ctx.is_admin)


@router.post(
    "/categories.create", response_model=IdResult, dependencies=[Depends(require_admin)]
)
def create_category(payload: CategoryCreate, db: Session = Depends(get_db)):
    return IdResult(id=CategoryRepository(db).create(payload.supplied()))


@router.post(
    "/categories.update",
    response_model=SuccessResult,
    dependencies=[Depends(require_admin)],
)
def update_category(payload: CategoryUpdate, db: Session = Depends(get_db)):
    CategoryRepository(db).update(payload.id, payload.supplied())
    return SuccessResult()


@router.post(
    "/categories.delete",
    response_model=SuccessResult,
    dependencies=[Depends(require_admin)],
)
def delete_category(payload: IdInput, db: Session = Depends(get_db)):
    CategoryRepository(db).delete(payload.id)
    return SuccessResult()
