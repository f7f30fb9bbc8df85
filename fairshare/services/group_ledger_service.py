from typing import List, Tuple

from motor.motor_asyncio import AsyncIOMotorDatabase

from fairshare.db.mongo import transaction
from fairshare.models.expense import GroupExpense
from fairshare.models.group import Group
from fairshare.models.ledger import MemberBalance, Transfer
from fairshare.models.settlement import Settlement
from fairshare.repositories.activity_repo import ActivityRepository
from fairshare.repositories.expense_repo import ExpenseRepository
from fairshare.repositories.settlement_repo import SettlementRepository
from fairshare.schemas.expense import to_expense_response
from fairshare.schemas.ledger import ActivityResponse, GroupSummaryResponse, MemberWithBalance
from fairshare.services.ledger_service import LedgerService


class GroupLedgerService:
    """Reads a group's ledger rows and runs the pure ledger computations over them."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.expenses = ExpenseRepository(db)
        self.settlements = SettlementRepository(db)
        self.activity = ActivityRepository(db)

    async def load(self, group_id: str) -> Tuple[List[GroupExpense], List[Settlement]]:
        """Active expenses and all settlements, read from one snapshot."""
        async with transaction(self.db, snapshot=True) as session:
            expenses = await self.expenses.list_active(group_id, session=session)
            settlements = await self.settlements.list_for_group(group_id, session=session)
        return expenses, settlements

    async def balances(self, group: Group) -> List[MemberBalance]:
        expenses, settlements = await self.load(group.id)
        return LedgerService.group_balances(group.members, expenses, settlements)

    async def debt_tree(self, group: Group) -> List[Transfer]:
        expenses, settlements = await self.load(group.id)
        return LedgerService.build_debt_tree(group.members, expenses, settlements)

    async def summary(self, group: Group, user_id: str) -> GroupSummaryResponse:
        """Everything the group page needs in one call."""
        expenses, settlements = await self.load(group.id)
        balances = LedgerService.calculate_balances(group.members, expenses, settlements)
        debt_tree = LedgerService.build_debt_tree(group.members, expenses, settlements)
        activities = await self.activity.list_for_group(group.id)

        me = group.find_member_by_user(user_id)
        members = [
            MemberWithBalance(
                member_id=m.member_id,
                user_id=m.user_id,
                name=m.name,
                role=m.role,
                status=m.status,
                balance_cents=balances[m.member_id].balance_cents,
                outstanding_cents=balances[m.member_id].outstanding_cents,
            )
            for m in group.members
        ]

        return GroupSummaryResponse(
            group_id=group.id,
            total_spend_cents=sum(e.amount_cents for e in expenses),
            user_balance_cents=balances[me.member_id].balance_cents if me else 0,
            members=members,
            expenses=[to_expense_response(e) for e in expenses],
            debt_tree=debt_tree,
            activities=[ActivityResponse.from_log(a) for a in activities],
        )
