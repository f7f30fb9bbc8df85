import calendar
import logging
from datetime import date, datetime, timezone
from typing import Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from fairshare.analysis.ewma import compute_ewma_with_anomalies
from fairshare.core.config import settings
from fairshare.insights.engine import generate_all_signals, summarize_signals
from fairshare.insights.policy import SignalPolicy
from fairshare.repositories.personal_expense_repo import PersonalExpenseRepository
from fairshare.schemas.insight import AnalyzeResponse
from fairshare.utils.aggregation import (
    aggregate_daily_category_spend,
    month_bounds,
    monthly_category_breakdown,
)

logger = logging.getLogger(__name__)


def reference_day(month: Optional[date], today: Optional[date] = None) -> date:
    """
    The day budget pressure is measured at.

    Today for the current month, the last day of the month for a past month.
    """
    today = today or date.today()
    if month is None or (month.year, month.month) == (today.year, today.month):
        return today
    last_day = calendar.monthrange(month.year, month.month)[1]
    return month.replace(day=last_day)


class InsightService:
    """Personal spending signals, recomputed from raw rows on every call."""

    def __init__(self, db: AsyncIOMotorDatabase, policy: Optional[SignalPolicy] = None):
        self.db = db
        self.expenses = PersonalExpenseRepository(db)
        self.policy = policy or SignalPolicy.from_settings()

    async def analyze(
        self,
        user_id: str,
        month: Optional[date] = None,
        today: Optional[date] = None,
    ) -> AnalyzeResponse:
        as_of = reference_day(month, today)
        start, end = month_bounds(month or as_of)

        rows = await self.expenses.list_for_user(user_id, start, end)
        category_data = aggregate_daily_category_spend(rows)

        signals = generate_all_signals(
            user_id,
            category_data,
            budgets=settings.CATEGORY_BUDGETS,
            today=as_of,
            policy=self.policy,
        )
        chart_data = {
            category: compute_ewma_with_anomalies(data, self.policy.ewma_alpha, self.policy.anomaly_factor)
            for category, data in category_data.items()
        }

        logger.info(
            "Analyzed %d rows for user %s: %d signals", len(rows), user_id, len(signals)
        )
        return AnalyzeResponse(
            user_id=user_id,
            generated_at=datetime.now(timezone.utc),
            summary=summarize_signals(signals),
            signals=signals,
            chart_data=chart_data,
        )

    async def monthly_breakdown(self, user_id: str) -> List[Dict[str, object]]:
        rows = await self.expenses.list_for_user(user_id)
        return monthly_category_breakdown(rows)
