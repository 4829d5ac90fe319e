from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from kaptan.auth import AccessContext, get_access_context, require_admin
from kaptan.database import get_db
from kaptan.repositories import CaravanRouteRepository
from kaptan.routers.common import RPC_PREFIX, visible_only
from kaptan.schemas.common import IdInput, IdResult, SuccessResult
from kaptan.schemas.content import (
    CaravanRouteCreate,
    CaravanRouteOut,
    CaravanRouteUpdate,
)

router = APIRouter(prefix=RPC_PREFIX, tags=["caravanRoutes"])


@router.get("/caravanRoutes.list", response_model=list[CaravanRouteOut])
def list_routes(
    published_only: bool | None = None,
    db: Session = Depends(get_db),
    ctx: AccessContext = Depends(get_access_context),
):
    return CaravanRouteRepository(db).list(
        visible_only=visible_only(published_only, ctx)
    )


@router.get("/caravanRoutes.getById", response_model=CaravanRouteOut | None)
def get_route(
    id: int,
    db: Session = Depends(get_db),
    ctx: AccessContext = Depends(get_access_context),
):
    return CaravanRouteRepository(db).get_by_id(id, visible_only=not ctx.is_admin)


@router.get("/caravanRoutes.getBySlug", response_model=CaravanRouteOut | None)
def get_route_by_slug(
    slug: str,
    db: Session = Depends(get_db),
    ctx: AccessContext = Depends(get_access_context),
):
    return CaravanRouteRepository(db).get_by_slug(slug, visible_only=not ctx.is_admin)


@router.get("/caravanRoutes.getFeatured", response_model=list[CaravanRouteOut])
def list_featured_routes(
    limit: int = Query(3, ge=1, le=24),
    db: Session = Depends(get_db),
):
    return CaravanRouteRepository(db).list_featured(limit)


@router.post(
    "/caravanRoutes.create",
    response_model=IdResult,
    dependencies=[Depends(require_admin)],
)
def create_route(payload: CaravanRouteCreate, db: Session = Depends(get_db)):
    return IdResult(id=CaravanRouteRepository(db).create(payload.supplied()))


@router.post(
    "/caravanRoutes.update",
    response_model=SuccessResult,
    dependencies=[Depends(require_admin)],
)
def update_route(payload: CaravanRouteUpdate, db: Session = Depends(get_db)):
    CaravanRouteRepository(db).update(payload.id, payload.supplied())
    return SuccessResult()


@router.post(
    "/caravanRoutes.delete",
    response_model=SuccessResult,
    dependencies=[Depends(require_admin)],
)
def delete_route(payload: IdInput, db: Session = Depends(get_db)):
    CaravanRouteRepository(db).delete(payload.id)
    return SuccessResult()
