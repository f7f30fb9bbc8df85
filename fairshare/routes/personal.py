from datetime import date, datetime, timezone
from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import List, Optional

from fairshare.core.auth import get_current_user
from fairshare.db.mongo import get_db
from fairshare.models.personal_expense import PersonalExpense
from fairshare.models.user import UserResponse
from fairshare.repositories.personal_expense_repo import PersonalExpenseRepository
from fairshare.schemas.personal import PersonalExpenseCreate, PersonalExpenseResponse
from fairshare.utils.aggregation import month_bounds

router = APIRouter(prefix="/personal/expenses", tags=["personal"])


@router.post("", response_model=PersonalExpenseResponse, status_code=status.HTTP_201_CREATED)
async def create_personal_expense(
    expense_data: PersonalExpenseCreate,
    current_user: UserResponse = Depends(get_current_user),
    db = Depends(get_db)
):
    expense = PersonalExpense(
        user_id=current_user.id,
        description=expense_data.description,
        amount_cents=expense_data.amount_cents,
        category=expense_data.category,
        date=expense_data.date or datetime.now(timezone.utc),
    )
    expense = await PersonalExpenseRepository(db).create_expense(expense)
    return PersonalExpenseResponse.from_model(expense)


@router.get("", response_model=List[PersonalExpenseResponse])
async def list_personal_expenses(
    month: Optional[date] = Query(default=None, description="Any day in the month to list"),
    current_user: UserResponse = Depends(get_current_user),
    db = Depends(get_db)
):
    """The caller's rows, oldest first; all of them unless a month is given."""
    start, end = month_bounds(month) if month else (None, None)
    expenses = await PersonalExpenseRepository(db).list_for_user(current_user.id, start, end)
    return [PersonalExpenseResponse.from_model(e) for e in expenses]


@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_personal_expense(
    expense_id: str,
    current_user: UserResponse = Depends(get_current_user),
    db = Depends(get_db)
):
    deleted = await PersonalExpenseRepository(db).delete_expense(current_user.id, expense_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Expense not found"
        )
    return None
