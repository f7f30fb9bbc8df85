from datetime import date
from fastapi import APIRouter, Depends, Query
from typing import Optional

from fairshare.core.auth import get_current_user
from fairshare.db.mongo import get_db
from fairshare.models.user import UserResponse
from fairshare.schemas.stats import DashboardStatsResponse, PersonalStatsResponse
from fairshare.services.stats_service import StatsService

router = APIRouter(tags=["stats"])


@router.get("/personal/stats", response_model=PersonalStatsResponse)
async def personal_stats(
    month: Optional[date] = Query(default=None, description="Any day in the month to summarize"),
    current_user: UserResponse = Depends(get_current_user),
    db = Depends(get_db)
):
    """Income, spending by category, budget progress and recent transactions for one month."""
    return await StatsService(db).personal_stats(current_user.id, month=month)


@router.get("/dashboard/stats", response_model=DashboardStatsResponse)
async def dashboard_stats(
    current_user: UserResponse = Depends(get_current_user),
    db = Depends(get_db)
):
    return await StatsService(db).dashboard(current_user.id)
