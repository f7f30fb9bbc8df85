from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import List

from fairshare.core.auth import get_current_user
from fairshare.db.mongo import get_db
from fairshare.models.group import Group
from fairshare.models.user import UserResponse
from fairshare.repositories.activity_repo import ActivityRepository
from fairshare.routes.deps import caller_member, get_group_for_member
from fairshare.schemas.ledger import (
    ActivityResponse,
    BalancesResponse,
    DebtTreeResponse,
    GroupSummaryResponse,
)
from fairshare.services.group_ledger_service import GroupLedgerService
from fairshare.utils.ledger_validation import LedgerValidationError

router = APIRouter(prefix="/groups/{group_id}", tags=["ledger"])


def _inconsistent(e: LedgerValidationError) -> HTTPException:
    # stored rows no longer match the member list
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail=f"Group ledger is inconsistent: {e}"
    )


@router.get("/balances", response_model=BalancesResponse)
async def get_balances(
    group: Group = Depends(get_group_for_member),
    db = Depends(get_db)
):
    """Net balance per member, recomputed from expenses and settlements."""
    try:
        balances = await GroupLedgerService(db).balances(group)
    except LedgerValidationError as e:
        raise _inconsistent(e)
    return BalancesResponse(group_id=group.id, balances=balances)


@router.get("/debt-tree", response_model=DebtTreeResponse)
async def get_debt_tree(
    group: Group = Depends(get_group_for_member),
    current_user: UserResponse = Depends(get_current_user),
    db = Depends(get_db)
):
    """Minimal set of payments that settles everyone."""
    try:
        debt_tree = await GroupLedgerService(db).debt_tree(group)
    except LedgerValidationError as e:
        raise _inconsistent(e)
    return DebtTreeResponse(
        group_id=group.id,
        debt_tree=debt_tree,
        current_user_id=current_user.id,
        current_member_id=caller_member(group, current_user).member_id,
    )


@router.get("/summary", response_model=GroupSummaryResponse)
async def get_summary(
    group: Group = Depends(get_group_for_member),
    current_user: UserResponse = Depends(get_current_user),
    db = Depends(get_db)
):
    try:
        return await GroupLedgerService(db).summary(group, current_user.id)
    except LedgerValidationError as e:
        raise _inconsistent(e)


@router.get("/activities", response_model=List[ActivityResponse])
async def list_activities(
    limit: int = Query(default=100, ge=1, le=500),
    group: Group = Depends(get_group_for_member),
    db = Depends(get_db)
):
    """Activity log, newest first."""
    logs = await ActivityRepository(db).list_for_group(group.id, limit=limit)
    return [ActivityResponse.from_log(log) for log in logs]
