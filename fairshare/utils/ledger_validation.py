"""Group ledger validation utilities."""
from typing import Iterable, List, Sequence, Set

from fairshare.models.expense import GroupExpense, Split
from fairshare.models.group import Member
from fairshare.models.settlement import Settlement


class LedgerValidationError(ValueError):
    """Raised when expenses, splits or settlements are inconsistent."""
    pass


def validate_splits(amount_cents: int, splits: Sequence[Split], member_ids: Set[str]) -> None:
    """
    Validate the split set of one expense.

    Rules:
    - expense amount must be positive
    - at least one split
    - each split references a group member and is non-negative
    - split sum equals amount exactly (integer cents, no tolerance)
    """
    if amount_cents <= 0:
        raise LedgerValidationError(
            f"Expense amount must be positive: {amount_cents}"
        )

    if not splits:
        raise LedgerValidationError("Expense must have at least one split")

    for split in splits:
        if split.member_id not in member_ids:
            raise LedgerValidationError(
                f"Split member {split.member_id} is not a member of this group"
            )
        if split.amount_cents < 0:
            raise LedgerValidationError(
                f"Split for member {split.member_id} has negative amount: {split.amount_cents}"
            )

    split_total = sum(split.amount_cents for split in splits)
    if split_total != amount_cents:
        raise LedgerValidationError(
            f"Split total ({format_cents(split_total)}) must equal expense amount "
            f"({format_cents(amount_cents)})"
        )


def validate_expense(expense: GroupExpense, member_ids: Set[str]) -> None:
    if expense.paid_by_member_id not in member_ids:
        raise LedgerValidationError(
            f"Invalid payer - {expense.paid_by_member_id} is not a member of this group"
        )
    validate_splits(expense.amount_cents, expense.splits, member_ids)


def validate_settlement(settlement: Settlement, member_ids: Set[str]) -> None:
    if settlement.amount_cents <= 0:
        raise LedgerValidationError(
            f"Settlement amount must be positive: {settlement.amount_cents}"
        )
    if settlement.from_member_id == settlement.to_member_id:
        raise LedgerValidationError("A member cannot settle with themselves")
    for member_id in (settlement.from_member_id, settlement.to_member_id):
        if member_id not in member_ids:
            raise LedgerValidationError(
                f"Settlement member {member_id} is not a member of this group"
            )


def validate_ledger_inputs(
    members: Iterable[Member],
    expenses: Iterable[GroupExpense],
    settlements: Iterable[Settlement],
) -> None:
    """Fail fast on anything that would silently corrupt computed balances."""
    member_ids = {m.member_id for m in members}
    for expense in expenses:
        if expense.is_active():
            validate_expense(expense, member_ids)
    for settlement in settlements:
        validate_settlement(settlement, member_ids)


def format_cents(amount_cents: int) -> str:
    """Render cents as a dollar string, e.g. 1234 -> '$12.34'."""
    sign = "-" if amount_cents < 0 else ""
    whole, frac = divmod(abs(amount_cents), 100)
    return f"{sign}${whole}.{frac:02d}"


def equal_split(amount_cents: int, member_ids: List[str]) -> List[Split]:
    """
    Split an amount equally, handing leftover cents to the first members.
    """
    if not member_ids:
        raise LedgerValidationError("Cannot split an expense between zero members")
    per_member, remainder = divmod(amount_cents, len(member_ids))
    return [
        Split(member_id=member_id, amount_cents=per_member + (1 if i < remainder else 0))
        for i, member_id in enumerate(member_ids)
    ]
