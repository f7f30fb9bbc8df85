from fastapi import Depends, HTTPException, status

from fairshare.core.auth import get_current_user
from fairshare.db.mongo import get_db
from fairshare.models.group import Group, Member, MemberRole, MemberStatus
from fairshare.models.user import UserResponse
from fairshare.repositories.group_repo import GroupRepository


async def get_group_for_member(
    group_id: str,
    current_user: UserResponse = Depends(get_current_user),
    db = Depends(get_db)
) -> Group:
    """Load a group the caller belongs to (404 if missing, 403 if not a member)."""
    group = await GroupRepository(db).get_group(group_id)
    if not group:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Group not found"
        )
    if group.find_member_by_user(current_user.id) is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not a member of this group"
        )
    return group


def caller_member(group: Group, current_user: UserResponse) -> Member:
    return group.find_member_by_user(current_user.id)


def require_active(group: Group, current_user: UserResponse) -> Member:
    """Pending members can look but not write."""
    member = caller_member(group, current_user)
    if member is None or member.status != MemberStatus.ACTIVE.value:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Accept the group invitation first"
        )
    return member


def require_admin(group: Group, current_user: UserResponse) -> Member:
    member = caller_member(group, current_user)
    if member is None or member.role != MemberRole.ADMIN.value:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only group admins can do this"
        )
    return member
