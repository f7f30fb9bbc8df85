from pydantic import BaseModel
from datetime import datetime
from typing import List, Optional

from fairshare.models.activity import ActivityLog
from fairshare.models.ledger import MemberBalance, Transfer
from fairshare.schemas.expense import ExpenseResponse


class BalancesResponse(BaseModel):
    group_id: str
    balances: List[MemberBalance]


class DebtTreeResponse(BaseModel):
    group_id: str
    debt_tree: List[Transfer]
    current_user_id: str
    current_member_id: str


class MemberWithBalance(BaseModel):
    member_id: str
    user_id: str
    name: str
    role: str
    status: str
    balance_cents: int
    outstanding_cents: int


class ActivityResponse(BaseModel):
    id: Optional[str] = None
    action: str
    entity_type: str
    entity_id: Optional[str] = None
    details: str
    created_at: datetime

    @classmethod
    def from_log(cls, log: ActivityLog) -> "ActivityResponse":
        return cls(
            id=log.id,
            action=log.action,
            entity_type=log.entity_type,
            entity_id=log.entity_id,
            details=log.details,
            created_at=log.created_at,
        )


class GroupSummaryResponse(BaseModel):
    group_id: str
    total_spend_cents: int
    user_balance_cents: int
    members: List[MemberWithBalance]
    expenses: List[ExpenseResponse]
    debt_tree: List[Transfer]
    activities: List[ActivityResponse]
