"""
Month-level personal finance figures: income against spending, plus the
dashboard comparison with the previous month.

The aggregation functions are pure; StatsService only fetches rows.
"""

import logging
from collections import defaultdict
from datetime import date, timedelta
from typing import Dict, List, Optional, Sequence

from motor.motor_asyncio import AsyncIOMotorDatabase

from fairshare.core.config import settings
from fairshare.models.group import Group
from fairshare.models.income import Income
from fairshare.models.personal_expense import PersonalExpense
from fairshare.repositories.group_repo import GroupRepository
from fairshare.repositories.income_repo import IncomeRepository
from fairshare.repositories.personal_expense_repo import PersonalExpenseRepository
from fairshare.schemas.stats import (
    BudgetProgress,
    CategorySpend,
    DashboardAlert,
    DashboardGroup,
    DashboardStatsResponse,
    PeriodComparison,
    PersonalStatsResponse,
    TopCategory,
    Transaction,
)
from fairshare.utils.aggregation import month_bounds

logger = logging.getLogger(__name__)

# dashboard alert thresholds, in percent
SPENDING_INCREASE_ALERT_PCT = 20.0
INCOME_DROP_ALERT_PCT = -10.0
TOP_CATEGORY_ALERT_PCT = 40.0


def percent_change(current: int, previous: int) -> float:
    """Change relative to the previous period; 0 when there is nothing to compare with."""
    if previous <= 0:
        return 0.0
    return (current - previous) / previous * 100


def monthly_budget_cents(budgets: Optional[Dict[str, float]] = None) -> int:
    """Overall monthly budget: the sum of the per-category budgets."""
    budgets = settings.CATEGORY_BUDGETS if budgets is None else budgets
    return round(sum(budgets.values()) * 100)


def merge_transactions(
    expenses: Sequence[PersonalExpense],
    incomes: Sequence[Income],
) -> List[Transaction]:
    """Expenses and income in one feed, newest first."""
    feed = [
        Transaction(
            id=e.id,
            type="expense",
            amount_cents=e.amount_cents,
            category=e.category,
            description=e.description or None,
            date=e.date,
        )
        for e in expenses
    ]
    feed.extend(
        Transaction(
            id=i.id,
            type="income",
            amount_cents=i.amount_cents,
            category=i.source,
            description=i.description,
            date=i.date,
        )
        for i in incomes
    )
    feed.sort(key=lambda t: t.date, reverse=True)
    return feed


def build_personal_stats(
    month: date,
    expenses: Sequence[PersonalExpense],
    incomes: Sequence[Income],
    budget_cents: int,
) -> PersonalStatsResponse:
    total_income = sum(i.amount_cents for i in incomes)
    total_expenses = sum(e.amount_cents for e in expenses)

    income_by_source: Dict[str, int] = defaultdict(int)
    for income in incomes:
        income_by_source[income.source] += income.amount_cents

    spending_by_category: Dict[str, CategorySpend] = {}
    for expense in expenses:
        bucket = spending_by_category.setdefault(expense.category, CategorySpend())
        bucket.total_cents += expense.amount_cents
        bucket.count += 1

    progress = total_expenses / budget_cents * 100 if budget_cents > 0 else 0.0

    return PersonalStatsResponse(
        month=f"{month.year}-{month.month:02d}",
        total_income_cents=total_income,
        total_expenses_cents=total_expenses,
        net_cents=total_income - total_expenses,
        income_by_source=dict(income_by_source),
        spending_by_category=spending_by_category,
        recent_transactions=merge_transactions(expenses, incomes),
        budget=BudgetProgress(
            limit_cents=budget_cents,
            spent_cents=total_expenses,
            remaining_cents=budget_cents - total_expenses,
            progress_pct=round(progress, 1),
        ),
    )


def top_category(expenses: Sequence[PersonalExpense]) -> Optional[TopCategory]:
    """Largest spending category; ties go to the alphabetically first name."""
    totals: Dict[str, int] = defaultdict(int)
    for expense in expenses:
        totals[expense.category] += expense.amount_cents
    if not totals:
        return None

    category, amount = min(totals.items(), key=lambda item: (-item[1], item[0]))
    spent = sum(totals.values())
    return TopCategory(
        category=category,
        amount_cents=amount,
        percentage=round(amount / spent * 100, 1) if spent > 0 else 0.0,
    )


def build_alerts(
    spending: PeriodComparison,
    income: PeriodComparison,
    top: Optional[TopCategory],
) -> List[DashboardAlert]:
    alerts = []
    if spending.change_pct > SPENDING_INCREASE_ALERT_PCT:
        alerts.append(DashboardAlert(
            type="warning",
            message=f"Your spending increased by {spending.change_pct:.1f}% this month",
            category="spending",
        ))
    if income.change_pct < INCOME_DROP_ALERT_PCT:
        alerts.append(DashboardAlert(
            type="warning",
            message=f"Your income decreased by {abs(income.change_pct):.1f}% this month",
            category="income",
        ))
    if top is not None and top.percentage > TOP_CATEGORY_ALERT_PCT:
        alerts.append(DashboardAlert(
            type="info",
            message=f"{top.percentage:.0f}% of spending is on {top.category}",
            category="category",
        ))
    return alerts


def _dashboard_group(group: Group, user_id: str) -> DashboardGroup:
    member = group.find_member_by_user(user_id)
    return DashboardGroup(
        id=group.id,
        name=group.name,
        description=group.description,
        member_count=len(group.members),
        role=member.role if member else "member",
        status=member.status if member else "ACTIVE",
    )


def _in_month(row_date, month: date) -> bool:
    return (row_date.year, row_date.month) == (month.year, month.month)


class StatsService:
    """Income and spending totals, recomputed from raw rows on every call."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.expenses = PersonalExpenseRepository(db)
        self.incomes = IncomeRepository(db)
        self.groups = GroupRepository(db)

    async def personal_stats(self, user_id: str, month: Optional[date] = None) -> PersonalStatsResponse:
        month = month or date.today()
        start, end = month_bounds(month)

        expenses = await self.expenses.list_for_user(user_id, start, end)
        incomes = await self.incomes.list_for_user(user_id, start, end)

        return build_personal_stats(month, expenses, incomes, monthly_budget_cents())

    async def dashboard(self, user_id: str, today: Optional[date] = None) -> DashboardStatsResponse:
        """This month against last month, top category, groups and alerts."""
        today = today or date.today()
        last_month = today.replace(day=1) - timedelta(days=1)
        start, _ = month_bounds(last_month)
        _, end = month_bounds(today)

        # one query per collection covering both months
        expenses = await self.expenses.list_for_user(user_id, start, end)
        incomes = await self.incomes.list_for_user(user_id, start, end)
        groups = await self.groups.list_groups_for_user(user_id)

        current_expenses = [e for e in expenses if _in_month(e.date, today)]
        spent = sum(e.amount_cents for e in current_expenses)
        spent_before = sum(e.amount_cents for e in expenses if _in_month(e.date, last_month))
        earned = sum(i.amount_cents for i in incomes if _in_month(i.date, today))
        earned_before = sum(i.amount_cents for i in incomes if _in_month(i.date, last_month))

        spending = PeriodComparison(
            current_cents=spent,
            previous_cents=spent_before,
            change_pct=round(percent_change(spent, spent_before), 1),
        )
        income = PeriodComparison(
            current_cents=earned,
            previous_cents=earned_before,
            change_pct=round(percent_change(earned, earned_before), 1),
        )
        top = top_category(current_expenses)

        logger.debug("Dashboard for user %s: %d groups", user_id, len(groups))
        return DashboardStatsResponse(
            income=income,
            spending=spending,
            top_category=top,
            groups=[_dashboard_group(g, user_id) for g in groups],
            alerts=build_alerts(spending, income, top),
        )
