import logging
from fastapi import APIRouter, Depends, HTTPException, status
from typing import List

from fairshare.core.auth import get_current_user
from fairshare.db.mongo import get_db
from fairshare.models.group import Group
from fairshare.models.user import UserResponse
from fairshare.repositories.settlement_repo import SettlementRepository
from fairshare.routes.deps import get_group_for_member, require_active
from fairshare.schemas.settlement import SettlementCreate, SettlementResponse
from fairshare.services.settlement_service import SettlementService
from fairshare.utils.ledger_validation import LedgerValidationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/groups/{group_id}/settlements", tags=["settlements"])


@router.post("", response_model=SettlementResponse, status_code=status.HTTP_201_CREATED)
async def create_settlement(
    settlement_data: SettlementCreate,
    group: Group = Depends(get_group_for_member),
    current_user: UserResponse = Depends(get_current_user),
    db = Depends(get_db)
):
    """Record a payment (payer only)."""
    member = require_active(group, current_user)
    if settlement_data.from_member_id != member.member_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the payer can record this settlement"
        )

    try:
        settlement = await SettlementService(db).create(group, settlement_data)
    except LedgerValidationError as e:
        logger.warning("Rejected settlement in group %s: %s", group.id, e)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    return SettlementResponse.from_model(settlement)


@router.get("", response_model=List[SettlementResponse])
async def list_settlements(
    group: Group = Depends(get_group_for_member),
    db = Depends(get_db)
):
    settlements = await SettlementRepository(db).list_for_group(group.id)
    return [SettlementResponse.from_model(s) for s in settlements]
