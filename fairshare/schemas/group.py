from pydantic import BaseModel, EmailStr, Field
from datetime import datetime
from typing import List, Optional

from fairshare.models.group import Group, MemberRole


class GroupCreate(BaseModel):
    """Schema for creating a group"""
    name: str = Field(..., min_length=2, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)


class MemberAdd(BaseModel):
    """Invite a user by email; they join as PENDING until they accept."""
    email: EmailStr


class MemberRoleUpdate(BaseModel):
    role: MemberRole


class MemberResponse(BaseModel):
    member_id: str
    user_id: str
    name: str
    role: str
    status: str
    joined_at: datetime


class GroupResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    created_by: str
    created_at: datetime
    updated_at: datetime
    members: List[MemberResponse]


def to_group_response(group: Group) -> GroupResponse:
    return GroupResponse(
        id=group.id,
        name=group.name,
        description=group.description,
        created_by=group.created_by,
        created_at=group.created_at,
        updated_at=group.updated_at,
        members=[MemberResponse(**m.model_dump(exclude={"group_id"})) for m in group.members],
    )
