import logging
from fastapi import APIRouter, Depends, HTTPException, status
from typing import List

from fairshare.core.auth import get_current_user
from fairshare.db.mongo import get_db, transaction
from fairshare.models.group import Group, MemberStatus
from fairshare.models.user import UserResponse
from fairshare.repositories.activity_repo import ActivityRepository
from fairshare.repositories.group_repo import GroupRepository
from fairshare.repositories.user_repo import UserRepository
from fairshare.routes.deps import caller_member, get_group_for_member, require_admin
from fairshare.schemas.group import (
    GroupCreate,
    GroupResponse,
    MemberAdd,
    MemberResponse,
    MemberRoleUpdate,
    to_group_response,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/groups", tags=["groups"])


@router.post("", response_model=GroupResponse, status_code=status.HTTP_201_CREATED)
async def create_group(
    group_data: GroupCreate,
    current_user: UserResponse = Depends(get_current_user),
    db = Depends(get_db)
):
    """Create a group; the caller becomes its admin."""
    async with transaction(db) as session:
        group = await GroupRepository(db).create_group(
            name=group_data.name,
            description=group_data.description,
            creator_id=current_user.id,
            creator_name=current_user.name,
            session=session,
        )
        await ActivityRepository(db).log(
            group.id,
            action="created",
            entity_type="group",
            entity_id=group.id,
            details=f'{current_user.name} created group "{group.name}"',
            session=session,
        )
    logger.info("Group %s created by %s", group.id, current_user.id)
    return to_group_response(group)


@router.get("", response_model=List[GroupResponse])
async def list_groups(
    current_user: UserResponse = Depends(get_current_user),
    db = Depends(get_db)
):
    """Groups the caller belongs to, including pending invitations."""
    groups = await GroupRepository(db).list_groups_for_user(current_user.id)
    return [to_group_response(g) for g in groups]


@router.get("/{group_id}", response_model=GroupResponse)
async def get_group(group: Group = Depends(get_group_for_member)):
    return to_group_response(group)


@router.delete("/{group_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_group(
    group: Group = Depends(get_group_for_member),
    current_user: UserResponse = Depends(get_current_user),
    db = Depends(get_db)
):
    """Delete a group with all of its expenses, settlements and activity (admin only)."""
    require_admin(group, current_user)
    async with transaction(db) as session:
        await GroupRepository(db).delete_group(group.id, session=session)
    logger.info("Group %s deleted by %s", group.id, current_user.id)
    return None


@router.post("/{group_id}/members", response_model=MemberResponse, status_code=status.HTTP_201_CREATED)
async def add_member(
    member_data: MemberAdd,
    group: Group = Depends(get_group_for_member),
    current_user: UserResponse = Depends(get_current_user),
    db = Depends(get_db)
):
    """Invite a registered user by email (admin only)."""
    require_admin(group, current_user)

    user = await UserRepository(db).get_user_by_email(member_data.email)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    if group.find_member_by_user(str(user.id)) is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User is already a member of this group"
        )

    async with transaction(db) as session:
        member = await GroupRepository(db).add_member(
            group.id, str(user.id), user.name, session=session
        )
        await ActivityRepository(db).log(
            group.id,
            action="invited",
            entity_type="member",
            entity_id=member.member_id,
            details=f"{current_user.name} invited {user.name}",
            session=session,
        )
    return MemberResponse(**member.model_dump(exclude={"group_id"}))


@router.post("/{group_id}/members/accept", response_model=GroupResponse)
async def accept_invitation(
    group: Group = Depends(get_group_for_member),
    current_user: UserResponse = Depends(get_current_user),
    db = Depends(get_db)
):
    """Turn the caller's pending membership into an active one."""
    member = caller_member(group, current_user)
    if member.status != MemberStatus.PENDING.value:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No pending invitation for this group"
        )

    async with transaction(db) as session:
        updated = await GroupRepository(db).update_member(
            group.id, member.member_id, session=session, status=MemberStatus.ACTIVE
        )
        await ActivityRepository(db).log(
            group.id,
            action="joined",
            entity_type="member",
            entity_id=member.member_id,
            details=f"{member.name} joined the group",
            session=session,
        )
    return to_group_response(updated)


@router.patch("/{group_id}/members/{member_id}/role", response_model=GroupResponse)
async def change_member_role(
    member_id: str,
    role_data: MemberRoleUpdate,
    group: Group = Depends(get_group_for_member),
    current_user: UserResponse = Depends(get_current_user),
    db = Depends(get_db)
):
    """Promote or demote a member (admin only)."""
    require_admin(group, current_user)

    target = group.find_member(member_id)
    if target is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Member not found"
        )

    async with transaction(db) as session:
        updated = await GroupRepository(db).update_member(
            group.id, member_id, session=session, role=role_data.role
        )
        await ActivityRepository(db).log(
            group.id,
            action="role_changed",
            entity_type="member",
            entity_id=member_id,
            details=f"{current_user.name} made {target.name} {role_data.role.value}",
            session=session,
        )
    return to_group_response(updated)
