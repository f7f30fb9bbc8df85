import logging
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import List, Optional

from fairshare.core.auth import get_current_user
from fairshare.db.mongo import get_db
from fairshare.models.income import Income
from fairshare.models.user import UserResponse
from fairshare.repositories.income_repo import IncomeRepository
from fairshare.schemas.income import (
    IncomeCreate,
    IncomeDelete,
    IncomeDeleteResponse,
    IncomeResponse,
    IncomeUpdate,
)
from fairshare.utils.aggregation import month_bounds

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/income", tags=["income"])


@router.post("", response_model=IncomeResponse, status_code=status.HTTP_201_CREATED)
async def create_income(
    income_data: IncomeCreate,
    current_user: UserResponse = Depends(get_current_user),
    db = Depends(get_db)
):
    income = Income(user_id=current_user.id, **income_data.model_dump())
    income = await IncomeRepository(db).create_income(income)
    logger.info("Income %s recorded for user %s", income.id, current_user.id)
    return IncomeResponse.from_model(income)


@router.get("", response_model=List[IncomeResponse])
async def list_income(
    month: Optional[date] = Query(default=None, description="Any day in the month to list"),
    limit: Optional[int] = Query(default=None, ge=1, le=500),
    current_user: UserResponse = Depends(get_current_user),
    db = Depends(get_db)
):
    """The caller's income, newest first."""
    start, end = month_bounds(month) if month else (None, None)
    incomes = await IncomeRepository(db).list_for_user(current_user.id, start, end, limit=limit)
    return [IncomeResponse.from_model(i) for i in incomes]


@router.put("/{income_id}", response_model=IncomeResponse)
async def update_income(
    income_id: str,
    income_data: IncomeUpdate,
    current_user: UserResponse = Depends(get_current_user),
    db = Depends(get_db)
):
    repo = IncomeRepository(db)
    existing = await repo.get_income(income_id)
    if not existing:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Income not found"
        )
    if existing.user_id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not allowed to edit this income"
        )

    fields = income_data.model_dump(exclude_unset=True)
    if not fields:
        return IncomeResponse.from_model(existing)

    updated = await repo.update_income(income_id, **fields)
    if not updated:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Income not found"
        )
    return IncomeResponse.from_model(updated)


@router.delete("", response_model=IncomeDeleteResponse)
async def delete_income(
    delete_data: IncomeDelete,
    current_user: UserResponse = Depends(get_current_user),
    db = Depends(get_db)
):
    """Bulk delete; ids the caller does not own are left alone."""
    deleted = await IncomeRepository(db).delete_many(current_user.id, delete_data.ids)
    return IncomeDeleteResponse(
        deleted_count=deleted,
        message=f"Deleted {deleted} income record(s)",
    )
