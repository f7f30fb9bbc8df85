from pydantic import BaseModel
from datetime import datetime
from typing import Dict, List, Literal, Optional


class CategorySpend(BaseModel):
    total_cents: int = 0
    count: int = 0


class Transaction(BaseModel):
    """An expense or income row in the merged recent-activity feed."""
    id: str
    type: Literal["expense", "income"]
    amount_cents: int
    category: str
    description: Optional[str] = None
    date: datetime


class BudgetProgress(BaseModel):
    limit_cents: int
    spent_cents: int
    remaining_cents: int
    progress_pct: float


class PersonalStatsResponse(BaseModel):
    month: str
    total_income_cents: int
    total_expenses_cents: int
    net_cents: int
    income_by_source: Dict[str, int]
    spending_by_category: Dict[str, CategorySpend]
    recent_transactions: List[Transaction]
    budget: BudgetProgress


class PeriodComparison(BaseModel):
    current_cents: int
    previous_cents: int
    change_pct: float


class TopCategory(BaseModel):
    category: str
    amount_cents: int
    percentage: float


class DashboardGroup(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    member_count: int
    role: str
    status: str


class DashboardAlert(BaseModel):
    type: Literal["warning", "info"]
    message: str
    category: str


class DashboardStatsResponse(BaseModel):
    income: PeriodComparison
    spending: PeriodComparison
    top_category: Optional[TopCategory]
    groups: List[DashboardGroup]
    alerts: List[DashboardAlert]
