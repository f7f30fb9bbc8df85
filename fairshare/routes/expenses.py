import logging
from fastapi import APIRouter, Depends, HTTPException, status
from typing import List

from fairshare.core.auth import get_current_user
from fairshare.db.mongo import get_db
from fairshare.models.group import Group
from fairshare.models.user import UserResponse
from fairshare.repositories.expense_repo import ExpenseRepository
from fairshare.routes.deps import get_group_for_member, require_active
from fairshare.schemas.expense import ExpenseCreate, ExpenseResponse, to_expense_response
from fairshare.services.expense_service import ExpenseService
from fairshare.utils.ledger_validation import LedgerValidationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/groups/{group_id}/expenses", tags=["expenses"])


async def _get_expense_or_404(db, group_id: str, expense_id: str):
    expense = await ExpenseRepository(db).get_expense(group_id, expense_id)
    if not expense:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Expense not found"
        )
    return expense


@router.post("", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
async def create_expense(
    expense_data: ExpenseCreate,
    group: Group = Depends(get_group_for_member),
    current_user: UserResponse = Depends(get_current_user),
    db = Depends(get_db)
):
    """Add a shared expense. Splits must add up to the amount exactly."""
    actor = require_active(group, current_user)
    try:
        expense = await ExpenseService(db).create(group, actor.name, current_user.id, expense_data)
    except LedgerValidationError as e:
        logger.warning("Rejected expense in group %s: %s", group.id, e)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    return to_expense_response(expense)


@router.get("", response_model=List[ExpenseResponse])
async def list_expenses(
    group: Group = Depends(get_group_for_member),
    db = Depends(get_db)
):
    """Active expenses, newest first."""
    expenses = await ExpenseRepository(db).list_active(group.id)
    return [to_expense_response(e) for e in expenses]


@router.get("/{expense_id}", response_model=ExpenseResponse)
async def get_expense(
    expense_id: str,
    group: Group = Depends(get_group_for_member),
    db = Depends(get_db)
):
    expense = await _get_expense_or_404(db, group.id, expense_id)
    return to_expense_response(expense)


@router.put("/{expense_id}", response_model=ExpenseResponse)
async def update_expense(
    expense_id: str,
    expense_data: ExpenseCreate,
    group: Group = Depends(get_group_for_member),
    current_user: UserResponse = Depends(get_current_user),
    db = Depends(get_db)
):
    """Replace an expense, including its whole split set."""
    actor = require_active(group, current_user)
    existing = await _get_expense_or_404(db, group.id, expense_id)
    try:
        expense = await ExpenseService(db).update(group, actor.name, existing, expense_data)
    except LedgerValidationError as e:
        logger.warning("Rejected expense in group %s: %s", group.id, e)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    return to_expense_response(expense)


@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_expense(
    expense_id: str,
    group: Group = Depends(get_group_for_member),
    current_user: UserResponse = Depends(get_current_user),
    db = Depends(get_db)
):
    """Soft delete; the expense drops out of every balance."""
    actor = require_active(group, current_user)
    existing = await _get_expense_or_404(db, group.id, expense_id)
    deleted = await ExpenseService(db).delete(group, actor.name, existing)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Expense not found"
        )
    return None
