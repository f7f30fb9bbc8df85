"""
Group model - a set of members sharing expenses.

Members are embedded in the group document. Each membership carries its own
member_id, distinct from the user's account id, and every ledger row
(expense payer, split, settlement) references members, never users.
"""

from typing import List, Optional
from datetime import datetime, timezone
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict


class MemberRole(str, Enum):
    ADMIN = "admin"
    MEMBER = "member"


class MemberStatus(str, Enum):
    ACTIVE = "ACTIVE"
    PENDING = "PENDING"


class Member(BaseModel):
    """A user's membership record within one group."""
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    member_id: str
    group_id: str
    user_id: str
    name: str = "Unknown"
    role: MemberRole = MemberRole.MEMBER
    status: MemberStatus = MemberStatus.ACTIVE
    joined_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class Group(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(default=None, validation_alias="_id", serialization_alias="_id")
    name: str
    description: Optional[str] = None
    created_by: str
    members: List[Member] = []
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def find_member_by_user(self, user_id: str) -> Optional[Member]:
        for member in self.members:
            if member.user_id == user_id:
                return member
        return None

    def find_member(self, member_id: str) -> Optional[Member]:
        for member in self.members:
            if member.member_id == member_id:
                return member
        return None

    def member_ids(self) -> List[str]:
        return [m.member_id for m in self.members]
