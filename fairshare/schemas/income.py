from pydantic import BaseModel, Field
from datetime import datetime
from typing import List, Optional

from fairshare.models.income import Income


class IncomeCreate(BaseModel):
    amount_cents: int = Field(..., gt=0)
    source: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=200)
    date: datetime


class IncomeUpdate(BaseModel):
    """Partial update; omitted fields keep their value."""
    amount_cents: Optional[int] = Field(default=None, gt=0)
    source: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=200)
    date: Optional[datetime] = None


class IncomeDelete(BaseModel):
    ids: List[str] = Field(..., min_length=1)


class IncomeDeleteResponse(BaseModel):
    deleted_count: int
    message: str


class IncomeResponse(BaseModel):
    id: str
    amount_cents: int
    source: str
    description: Optional[str]
    date: datetime

    @classmethod
    def from_model(cls, income: Income) -> "IncomeResponse":
        return cls(
            id=income.id,
            amount_cents=income.amount_cents,
            source=income.source,
            description=income.description,
            date=income.date,
        )
