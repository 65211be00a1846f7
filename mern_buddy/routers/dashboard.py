"""Dashboard router - derived progress statistics."""
import logging

from fastapi import APIRouter, Depends, HTTPException
from pymongo.errors import PyMongoError

from mern_buddy.config import settings
from mern_buddy.database import get_database
from mern_buddy.models.stats import Dashboard, ProgressStats
from mern_buddy.routers.auth import get_current_user_id
from mern_buddy.services.dashboard_service import DashboardService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


async def _load_dashboard(user_id: str, db) -> Dashboard:
    service = DashboardService(db)
    try:
        return await service.get_dashboard(
            user_id=user_id,
            window_days=settings.upcoming_window_days,
        )
    except PyMongoError:
        logger.exception("Get dashboard error")
        raise HTTPException(status_code=500, detail="Error loading dashboard")


@router.get("", response_model=Dashboard)
async def get_dashboard(
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Topics, goals and the stats computed over them, in one response.
    """
    return await _load_dashboard(user_id, db)


@router.get("/stats", response_model=ProgressStats)
async def get_stats(
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Progress statistics for the authenticated user.

    Recomputed on every request from the current topics and goals.
    """
    dashboard = await _load_dashboard(user_id, db)
    return dashboard.stats
