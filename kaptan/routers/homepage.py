"""Aggregate endpoints: public homepage data and admin dashboard stats."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from kaptan.auth import require_admin
from kaptan.database import get_db
from kaptan.routers.common import RPC_PREFIX
from kaptan.schemas.dashboard import DashboardStats, HomepageData
from kaptan.services.homepage import dashboard_stats, homepage_data

router = APIRouter(prefix=RPC_PREFIX)


@router.get("/homepage.getData", response_model=HomepageData, tags=["homepage"])
def get_homepage_data(db: Session = Depends(get_db)):
    return homepage_data(db)


@router.get(
    "/dashboard.stats",
    response_model=DashboardStats,
    dependencies=[Depends(require_admin)],
    tags=["dashboard"],
)
def get_dashboard_stats(db: Session = Depends(get_db)):
    return dashboard_stats(db)
