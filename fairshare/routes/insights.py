from datetime import date
from fastapi import APIRouter, Depends, Query
from typing import Any, Dict, List, Optional

from fairshare.core.auth import get_current_user
from fairshare.db.mongo import get_db
from fairshare.models.user import UserResponse
from fairshare.schemas.insight import AnalyzeResponse
from fairshare.services.insight_service import InsightService

router = APIRouter(prefix="/insights", tags=["insights"])


@router.get("/analyze", response_model=AnalyzeResponse)
async def analyze(
    month: Optional[date] = Query(default=None, description="Any day in the month to analyze"),
    current_user: UserResponse = Depends(get_current_user),
    db = Depends(get_db)
):
    """Signals for one month of personal spending, plus EWMA chart data per category."""
    return await InsightService(db).analyze(current_user.id, month=month)


@router.get("/monthly-breakdown", response_model=List[Dict[str, Any]])
async def monthly_breakdown(
    current_user: UserResponse = Depends(get_current_user),
    db = Depends(get_db)
):
    return await InsightService(db).monthly_breakdown(current_user.id)
