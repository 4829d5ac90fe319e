"""Hero sections, feature cards and team members.

All three are curated lists ordered by ``sort_order`` and gated on
``is_active`` for public callers.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from kaptan.auth import AccessContext, get_access_context, require_admin
from kaptan.database import get_db
from kaptan.repositories import (
    FeatureCardRepository,
    HeroSectionRepository,
    TeamMemberRepository,
)
from kaptan.routers.common import RPC_PREFIX, visible_only
from kaptan.schemas.common import IdInput, IdResult, SuccessResult
from kaptan.schemas.homepage import (
    FeatureCardCreate,
    FeatureCardOut,
    FeatureCardUpdate,
    HeroSectionCreate,
    HeroSectionOut,
    HeroSectionUpdate,
    TeamMemberCreate,
    TeamMemberOut,
    TeamMemberUpdate,
)

router = APIRouter(prefix=RPC_PREFIX)
admin_only = [Depends(require_admin)]


# ==========================================
# Hero sections
# ==========================================
@router.get(
    "/heroSections.list", response_model=list[HeroSectionOut], tags=["heroSections"]
)
def list_hero_sections(
    active_only: bool | None = None,
    db: Session = Depends(get_db),
    ctx: AccessContext = Depends(get_access_context),
):
    return HeroSectionRepository(db).list(visible_only=visible_only(active_only, ctx))


@router.get(
    "/heroSections.getActive", response_model=HeroSectionOut | None, tags=["heroSections"]
)
def get_active_hero_section(db: Session = Depends(get_db)):
    return HeroSectionRepository(db).get_active()


@router.get(
    "/heroSections.getById", response_model=HeroSectionOut | None, tags=["heroSections"]
)
def get_hero_section(
    id: int,
    db: Session = Depends(get_db),
    ctx: AccessContext = Depends(get_access_context),
):
    return HeroSectionRepository(db).get_by_id(id, visible_only=not ctx.is_admin)


@router.post(
    "/heroSections.create",
    response_model=IdResult,
    dependencies=admin_only,
    tags=["heroSections"],
)
def create_hero_section(payload: HeroSectionCreate, db: Session = Depends(get_db)):
    return IdResult(id=HeroSectionRepository(db).create(payload.supplied()))


@router.post(
    "/heroSections.update",
    response_model=SuccessResult,
    dependencies=admin_only,
    tags=["heroSections"],
)
def update_hero_section(payload: HeroSectionUpdate, db: Session = Depends(get_db)):
    HeroSectionRepository(db).update(payload.id, payload.supplied())
    return SuccessResult()


@router.post(
    "/heroSections.delete",
    response_model=SuccessResult,
    dependencies=admin_only,
    tags=["heroSections"],
)
def delete_hero_section(payload: IdInput, db: Session = Depends(get_db)):
    HeroSectionRepository(db).delete(payload.id)
    return SuccessResult()


# ==========================================
# Feature cards
# ==========================================
@router.get(
    "/featureCards.list", response_model=list[FeatureCardOut], tags=["featureCards"]
)
def list_feature_cards(
    active_only: bool | None = None,
    db: Session = Depends(get_db),
    ctx: AccessContext = Depends(get_access_context),
):
    return FeatureCardRepository(db).list(visible_only=visible_only(active_only, ctx))


@router.get(
    "/featureCards.getById", response_model=FeatureCardOut | None, tags=["featureCards"]
)
def get_feature_card(
    id: int,
    db: Session = Depends(get_db),
    ctx: AccessContext = Depends(get_access_context),
):
    return FeatureCardRepository(db).get_by_id(id, visible_only=not ctx.is_admin)


@router.post(
    "/featureCards.create",
    response_model=IdResult,
    dependencies=admin_only,
    tags=["featureCards"],
)
def create_feature_card(payload: FeatureCardCreate, db: Session = Depends(get_db)):
    return IdResult(id=FeatureCardRepository(db).create(payload.supplied()))


@router.post(
    "/featureCards.update",
    response_model=SuccessResult,
    dependencies=admin_only,
    tags=["featureCards"],
)
def update_feature_card(payload: FeatureCardUpdate, db: Session = Depends(get_db)):
    FeatureCardRepository(db).update(payload.id, payload.supplied())
    return SuccessResult()


@router.post(
    "/featureCards.delete",
    response_model=SuccessResult,
    dependencies=admin_only,
    tags=["featureCards"],
)
def delete_feature_card(payload: IdInput, db: Session = Depends(get_db)):
    FeatureCardRepository(db).delete(payload.id)
    return SuccessResult()


# ==========================================
# Team members
# ==========================================
@router.get(
    "/teamMembers.list", response_model=list[TeamMemberOut], tags=["teamMembers"]
)
def list_team_members(
    active_only: bool | None = None,
    db: Session = Depends(get_db),
    ctx: AccessContext = Depends(get_access_context),
):
    return TeamMemberRepository(db).list(visible_only=visible_only(active_only, ctx))


@router.get(
    "/teamMembers.getById", response_model=TeamMemberOut | None, tags=["teamMembers"]
)
def get_team_member(
    id: int,
    db: Session = Depends(get_db),
    ctx: AccessContext = Depends(get_access_context),
):
    return TeamMemberRepository(db).get_by_id(id, visible_only=not ctx.is_admin)


@router.post(
    "/teamMembers.create",
    response_model=IdResult,
    dependencies=admin_only,
    tags=["teamMembers"],
)
def create_team_member(payload: TeamMemberCreate, db: Session = Depends(get_db)):
    return IdResult(id=TeamMemberRepository(db).create(payload.supplied()))


@router.post(
    "/teamMembers.update",
    response_model=SuccessResult,
    dependencies=admin_only,
    tags=["teamMembers"],
)
def update_team_member(payload: TeamMemberUpdate, db: Session = Depends(get_db)):
    TeamMemberRepository(db).update(payload.id, payload.supplied())
    return SuccessResult()


@router.post(
    "/teamMembers.delete",
    response_model=SuccessResult,
    dependencies=admin_only,
    tags=["teamMembers"],
)
def delete_team_member(payload: IdInput, db: Session = Depends(get_db)):
    TeamMemberRepository(db).delete(payload.id)
    return SuccessResult()
