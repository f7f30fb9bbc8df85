import logging
from datetime import datetime, timezone
from typing import List

from motor.motor_asyncio import AsyncIOMotorDatabase

from fairshare.db.mongo import transaction
from fairshare.models.expense import GroupExpense, Split
from fairshare.models.group import Group
from fairshare.repositories.activity_repo import ActivityRepository
from fairshare.repositories.expense_repo import ExpenseRepository
from fairshare.schemas.expense import ExpenseCreate
from fairshare.utils.ledger_validation import (
    LedgerValidationError,
    equal_split,
    format_cents,
    validate_expense,
)

logger = logging.getLogger(__name__)


def build_splits(payload: ExpenseCreate) -> List[Split]:
    """Explicit splits win; otherwise divide equally between split_between."""
    if payload.splits:
        return [Split(member_id=s.member_id, amount_cents=s.amount_cents) for s in payload.splits]
    if payload.split_between:
        return equal_split(payload.amount_cents, payload.split_between)
    raise LedgerValidationError("Provide either splits or split_between")


class ExpenseService:
    """Create, edit and delete group expenses; every change is logged to the group activity."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.expenses = ExpenseRepository(db)
        self.activity = ActivityRepository(db)

    async def create(self, group: Group, actor_name: str, actor_user_id: str, payload: ExpenseCreate) -> GroupExpense:
        expense = GroupExpense(
            group_id=group.id,
            description=payload.description,
            paid_by_member_id=payload.paid_by_member_id,
            amount_cents=payload.amount_cents,
            category=payload.category,
            date=payload.date or datetime.now(timezone.utc),
            splits=build_splits(payload),
            created_by=actor_user_id,
        )
        validate_expense(expense, set(group.member_ids()))

        payer = group.find_member(expense.paid_by_member_id)
        ways = len(expense.splits)

        async with transaction(self.db) as session:
            expense = await self.expenses.create_expense(expense, session=session)
            await self.activity.log(
                group.id,
                action="created",
                entity_type="expense",
                entity_id=expense.id,
                details=(
                    f'{actor_name} added expense "{expense.description}" - '
                    f"Amount: {format_cents(expense.amount_cents)} | Paid by: {payer.name} | "
                    f"Split {ways} {'way' if ways == 1 else 'ways'}"
                ),
                session=session,
            )

        logger.info("Expense %s created in group %s (%s)", expense.id, group.id, format_cents(expense.amount_cents))
        return expense

    async def update(
        self,
        group: Group,
        actor_name: str,
        existing: GroupExpense,
        payload: ExpenseCreate,
    ) -> GroupExpense:
        """Replace amount, payer, category, date and the entire split set."""
        splits = build_splits(payload)
        candidate = existing.model_copy(update={
            "description": payload.description,
            "amount_cents": payload.amount_cents,
            "category": payload.category,
            "paid_by_member_id": payload.paid_by_member_id,
            "date": payload.date or existing.date,
            "splits": splits,
        })
        validate_expense(candidate, set(group.member_ids()))

        changes = []
        if existing.description != candidate.description:
            changes.append(f'description from "{existing.description}" to "{candidate.description}"')
        if existing.amount_cents != candidate.amount_cents:
            changes.append(
                f"amount from {format_cents(existing.amount_cents)} to {format_cents(candidate.amount_cents)}"
            )
        if existing.paid_by_member_id != candidate.paid_by_member_id:
            changes.append("payer changed")
        if existing.category != candidate.category:
            changes.append(f'category from "{existing.category}" to "{candidate.category}"')
        change_text = f" | Changed: {', '.join(changes)}" if changes else ""

        payer = group.find_member(candidate.paid_by_member_id)

        async with transaction(self.db) as session:
            updated = await self.expenses.replace_expense(
                group.id,
                existing.id,
                description=candidate.description,
                amount_cents=candidate.amount_cents,
                category=candidate.category,
                paid_by_member_id=candidate.paid_by_member_id,
                date=candidate.date,
                splits=splits,
                session=session,
            )
            if updated is None:
                raise LedgerValidationError("Expense no longer exists")
            await self.activity.log(
                group.id,
                action="updated",
                entity_type="expense",
                entity_id=existing.id,
                details=(
                    f'{actor_name} edited expense "{candidate.description}" - '
                    f"Amount: {format_cents(candidate.amount_cents)} | Paid by: {payer.name}{change_text}"
                ),
                session=session,
            )

        logger.info("Expense %s updated in group %s", existing.id, group.id)
        return updated

    async def delete(self, group: Group, actor_name: str, existing: GroupExpense) -> bool:
        async with transaction(self.db) as session:
            deleted = await self.expenses.soft_delete(group.id, existing.id, session=session)
            if deleted:
                await self.activity.log(
                    group.id,
                    action="deleted",
                    entity_type="expense",
                    entity_id=existing.id,
                    details=(
                        f'{actor_name} deleted expense "{existing.description}" - '
                        f"Amount: {format_cents(existing.amount_cents)}"
                    ),
                    session=session,
                )

        if deleted:
            logger.info("Expense %s deleted in group %s", existing.id, group.id)
        return deleted
