from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from kaptan.auth import require_admin
from kaptan.database import get_db
from kaptan.errors import NotFound
from kaptan.repositories import SiteSettingRepository
from kaptan.routers.common import RPC_PREFIX
from kaptan.schemas.common import SuccessResult
from kaptan.schemas.site_setting import SiteSettingOut, SiteSettingUpsert

router = APIRouter(prefix=RPC_PREFIX, tags=["siteSettings"])


class SettingKey(BaseModel):
    key: str = Field(..., min_length=1)


@router.get("/siteSettings.list", response_model=list[SiteSettingOut])
def list_settings(db: Session = Depends(get_db)):
    return SiteSettingRepository(db).list()


@router.get("/siteSettings.getByGroup", response_model=list[SiteSettingOut])
def list_settings_by_group(group: str, db: Session = Depends(get_db)):
    return SiteSettingRepository(db).list_by_group(group)


@router.get("/siteSettings.getByKey", response_model=SiteSettingOut | None)
def get_setting(key: str, db: Session = Depends(get_db)):
    return SiteSettingRepository(db).get_by_key(key)


@router.post(
    "/siteSettings.upsert",
    response_model=SuccessResult,
    dependencies=[Depends(require_admin)],
)
def upsert_setting(payload: SiteSettingUpsert, db: Session = Depends(get_db)):
    SiteSettingRepository(db).upsert(payload.key, payload.supplied())
    return SuccessResult()


@router.post(
    "/siteSettings.bulkUpsert",
    response_model=SuccessResult,
    dependencies=[Depends(require_admin)],
)
def bulk_upsert_settings(
    payload: list[SiteSettingUpsert], db: Session = Depends(get_db)
):
    SiteSettingRepository(db).bulk_upsert(
        (item.key, item.supplied()) for item in payload
    )
    return SuccessResult()


@router.post(
    "/siteSettings.delete",
    response_model=SuccessResult,
    dependencies=[Depends(require_admin)],
)
def delete_setting(payload: SettingKey, db: Session = Depends(get_db)):
    if not SiteSettingRepository(db).delete_by_key(payload.key):
        raise NotFound(f"setting {payload.key!r} not found")
    return SuccessResult()
