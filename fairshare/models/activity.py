from typing import Optional
from datetime import datetime, timezone
from pydantic import BaseModel, Field, ConfigDict


class ActivityLog(BaseModel):
    """Human-readable audit line for a group mutation."""
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(default=None, validation_alias="_id", serialization_alias="_id")
    group_id: str
    action: str  # created | updated | deleted | settled | joined
    entity_type: str  # expense | settlement | member
    entity_id: Optional[str] = None
    details: str = ""
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
