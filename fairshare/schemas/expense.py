from pydantic import BaseModel, Field
from datetime import datetime
from typing import List, Optional

from fairshare.core.config import DEFAULT_CATEGORY
from fairshare.models.expense import GroupExpense


class SplitIn(BaseModel):
    member_id: str
    amount_cents: int = Field(..., ge=0)


class ExpenseCreate(BaseModel):
    """
    Add or replace a group expense.

    Either give explicit `splits`, or list `split_between` member ids to
    divide the amount equally.
    """
    description: str = Field(..., min_length=1, max_length=200)
    amount_cents: int = Field(..., gt=0)
    category: str = DEFAULT_CATEGORY
    paid_by_member_id: str
    splits: List[SplitIn] = []
    split_between: List[str] = []
    date: Optional[datetime] = None


class SplitResponse(BaseModel):
    member_id: str
    amount_cents: int


class ExpenseResponse(BaseModel):
    id: str
    group_id: str
    description: str
    amount_cents: int
    category: str
    paid_by_member_id: str
    date: datetime
    status: str
    splits: List[SplitResponse]
    created_at: datetime
    updated_at: datetime


def to_expense_response(expense: GroupExpense) -> ExpenseResponse:
    return ExpenseResponse(
        id=expense.id,
        group_id=expense.group_id,
        description=expense.description,
        amount_cents=expense.amount_cents,
        category=expense.category,
        paid_by_member_id=expense.paid_by_member_id,
        date=expense.date,
        status=expense.status,
        splits=[SplitResponse(**s.model_dump()) for s in expense.splits],
        created_at=expense.created_at,
        updated_at=expense.updated_at,
    )
