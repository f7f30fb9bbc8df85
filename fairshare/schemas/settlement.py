from pydantic import BaseModel, Field
from datetime import datetime

from fairshare.models.settlement import Settlement


class SettlementCreate(BaseModel):
    """Record that from_member paid to_member."""
    from_member_id: str
    to_member_id: str
    amount_cents: int = Field(..., gt=0)


class SettlementResponse(BaseModel):
    id: str
    group_id: str
    from_member_id: str
    to_member_id: str
    amount_cents: int
    created_at: datetime

    @classmethod
    def from_model(cls, settlement: Settlement) -> "SettlementResponse":
        return cls(
            id=settlement.id,
            group_id=settlement.group_id,
            from_member_id=settlement.from_member_id,
            to_member_id=settlement.to_member_id,
            amount_cents=settlement.amount_cents,
            created_at=settlement.created_at,
        )
