"""
Group expense model - a shared cost paid by one member and split between members.

Design principles:
- All amounts in integer cents
- Splits are embedded and replaced wholesale on edit, never patched
- Sum of split amounts must equal amount_cents exactly
- Deletion is logical: status moves to DELETED and the row stops counting
"""

from typing import List, Optional
from datetime import datetime, timezone
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict


class ExpenseStatus(str, Enum):
    ACTIVE = "ACTIVE"
    DELETED = "DELETED"


class Split(BaseModel):
    """One member's owed share of one expense."""
    member_id: str
    amount_cents: int


class GroupExpense(BaseModel):
    model_config = ConfigDict(populate_by_name=True, use_enum_values=True, validate_default=True)

    id: Optional[str] = Field(default=None, validation_alias="_id", serialization_alias="_id")
    group_id: str
    description: str = ""
    paid_by_member_id: str
    amount_cents: int
    category: str = "Other"
    date: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    status: ExpenseStatus = ExpenseStatus.ACTIVE
    splits: List[Split] = []

    created_by: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def split_total_cents(self) -> int:
        return sum(split.amount_cents for split in self.splits)

    def is_active(self) -> bool:
        return self.status == ExpenseStatus.ACTIVE
