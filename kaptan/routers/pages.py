from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from kaptan.auth import AccessContext, get_access_context, require_admin
from kaptan.database import get_db
from kaptan.repositories import PageRepository
from kaptan.routers.common import RPC_PREFIX, visible_only
from kaptan.schemas.common import IdInput, IdResult, SuccessResult
from kaptan.schemas.content import PageCreate, PageOut, PageUpdate

router = APIRouter(prefix=RPC_PREFIX, tags=["pages"])


@router.get("/pages.list", response_model=list[PageOut])
def list_pages(
    published_only: bool | None = None,
    db: Session = Depends(get_db),
    ctx: AccessContext = Depends(get_access_context),
):
    return PageRepository(db).list(visible_only=visible_only(published_only, ctx))


@router.get("/pages.getById", response_model=PageOut | None)
def get_page(
    id: int,
    db: Session = Depends(get_db),
    ctx: AccessContext = Depends(get_access_context),
):
    return PageRepository(db).get_by_id(id, visible_only=not ctx.is_admin)


@router.get("/pages.getBySlug", response_model=PageOut | None)
def get_page_by_slug(
    slug: str,
    db: Session = Depends(get_db),
    ctx: AccessContext = Depends(get_access_context),
):
    return PageRepository(db).get_by_slug(slug, visible_only=not ctx.is_admin)


@router.post("/pages.create", response_model=IdResult, dependencies=[Depends(require_admin)])
def create_page(payload: PageCreate, db: Session = Depends(get_db)):
    return IdResult(id=PageRepository(db).create(payload.supplied()))


@router.post(
    "/pages.update", response_model=SuccessResult, dependencies=[Depends(require_admin)]
)
def update_page(payload: PageUpdate, db: Session = Depends(get_db)):
    PageRepository(db).update(payload.id, payload.supplied())
    return SuccessResult()


@router.post(
    "/pages.delete", response_model=SuccessResult, dependencies=[Depends(require_admin)]
)
def delete_page(payload: IdInput, db: Session = Depends(get_db)):
    PageRepository(db).delete(payload.id)
    return SuccessResult()
