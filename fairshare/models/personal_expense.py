from typing import Optional
from datetime import datetime, timezone
from pydantic import BaseModel, Field, ConfigDict


class PersonalExpense(BaseModel):
    """One personal spending row. Feeds the insight aggregation."""
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(default=None, validation_alias="_id", serialization_alias="_id")
    user_id: str
    description: str = ""
    amount_cents: int
    category: str = "Other"
    date: datetime
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
