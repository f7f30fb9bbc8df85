from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional

from fairshare.core.config import DEFAULT_CATEGORY
from fairshare.models.personal_expense import PersonalExpense


class PersonalExpenseCreate(BaseModel):
    description: str = Field(default="", max_length=200)
    amount_cents: int = Field(..., gt=0)
    category: str = DEFAULT_CATEGORY
    date: Optional[datetime] = None


class PersonalExpenseResponse(BaseModel):
    id: str
    description: str
    amount_cents: int
    category: str
    date: datetime

    @classmethod
    def from_model(cls, expense: PersonalExpense) -> "PersonalExpenseResponse":
        return cls(
            id=expense.id,
            description=expense.description,
            amount_cents=expense.amount_cents,
            category=expense.category,
            date=expense.date,
        )
