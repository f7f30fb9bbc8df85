from typing import Optional
from datetime import datetime, timezone
from pydantic import BaseModel, Field, ConfigDict


class Settlement(BaseModel):
    """Payment from one member to another. Immutable once recorded."""
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(default=None, validation_alias="_id", serialization_alias="_id")
    group_id: str
    from_member_id: str
    to_member_id: str
    amount_cents: int
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
