"""
Ledger computation for a group - balances and the debt tree.

Balance formula (per member, integer cents):
    balance = paid - owed + settlements_received - settlements_paid

The debt tree works from the outstanding balance instead: the expense-only
balance with every recorded settlement taken back out (payee loses the
credit it already received, payer loses the debt it already paid).

Nothing here touches the database. Callers read members, expenses and
settlements in one go and pass them in; results are never stored.
"""

import logging
from typing import Dict, Iterable, List, Sequence

from fairshare.models.expense import GroupExpense
from fairshare.models.group import Member
from fairshare.models.ledger import MemberBalance, Transfer
from fairshare.models.settlement import Settlement
from fairshare.utils.ledger_validation import validate_ledger_inputs

logger = logging.getLogger(__name__)


class LedgerService:
    @staticmethod
    def calculate_balances(
        members: Sequence[Member],
        expenses: Iterable[GroupExpense],
        settlements: Iterable[Settlement],
        validate: bool = True,
    ) -> Dict[str, MemberBalance]:
        """
        Compute one balance record per member.

        One pass over active expenses and their splits, one pass over
        settlements. Rows referencing non-members are rejected when
        validate is set; otherwise they are skipped.
        """
        expenses = list(expenses)
        settlements = list(settlements)
        if validate:
            validate_ledger_inputs(members, expenses, settlements)

        balances: Dict[str, MemberBalance] = {
            m.member_id: MemberBalance(member_id=m.member_id, name=m.name)
            for m in members
        }

        for expense in expenses:
            if not expense.is_active():
                continue

            payer = balances.get(expense.paid_by_member_id)
            if payer is not None:
                payer.total_paid_cents += expense.amount_cents

            for split in expense.splits:
                owing = balances.get(split.member_id)
                if owing is not None:
                    owing.total_owed_cents += split.amount_cents

        for settlement in settlements:
            payee = balances.get(settlement.to_member_id)
            if payee is not None:
                payee.settlements_received_cents += settlement.amount_cents

            payer = balances.get(settlement.from_member_id)
            if payer is not None:
                payer.settlements_paid_cents += settlement.amount_cents

        for record in balances.values():
            net = record.total_paid_cents - record.total_owed_cents
            record.balance_cents = (
                net + record.settlements_received_cents - record.settlements_paid_cents
            )
            record.outstanding_cents = (
                net - record.settlements_received_cents + record.settlements_paid_cents
            )

        return balances

    @staticmethod
    def group_balances(
        members: Sequence[Member],
        expenses: Iterable[GroupExpense],
        settlements: Iterable[Settlement],
    ) -> List[MemberBalance]:
        """Balances as a list, in member order."""
        balances = LedgerService.calculate_balances(members, expenses, settlements)
        return [balances[m.member_id] for m in members]

    @staticmethod
    def remaining_balances(
        members: Sequence[Member],
        expenses: Iterable[GroupExpense],
        settlements: Iterable[Settlement],
        validate: bool = True,
    ) -> Dict[str, int]:
        """Outstanding balance per member: what is still left to settle."""
        balances = LedgerService.calculate_balances(
            members, expenses, settlements, validate=validate
        )
        return {member_id: b.outstanding_cents for member_id, b in balances.items()}

    @staticmethod
    def plan_settlements(balances: Dict[str, int]) -> List[Transfer]:
        """
        Greedy debt simplification.

        Debtors are sorted most-negative first, creditors most-positive
        first, ties broken by member id. Two pointers walk the lists and each
        step moves min(debt, credit). Returns at most len(balances) - 1
        transfers; members already at zero take no part. Balances are exact
        cents, so every nonzero balance is closed to zero.
        """
        debtors = sorted(
            ([member_id, -amount] for member_id, amount in balances.items() if amount < 0),
            key=lambda d: (-d[1], d[0]),
        )
        creditors = sorted(
            ([member_id, amount] for member_id, amount in balances.items() if amount > 0),
            key=lambda c: (-c[1], c[0]),
        )

        transfers: List[Transfer] = []
        i = 0
        j = 0

        while i < len(debtors) and j < len(creditors):
            debtor = debtors[i]
            creditor = creditors[j]

            amount = min(debtor[1], creditor[1])
            transfers.append(Transfer(
                from_member_id=debtor[0],
                to_member_id=creditor[0],
                amount_cents=amount,
            ))

            debtor[1] -= amount
            creditor[1] -= amount

            if debtor[1] == 0:
                i += 1
            if creditor[1] == 0:
                j += 1

        return transfers

    @staticmethod
    def build_debt_tree(
        members: Sequence[Member],
        expenses: Iterable[GroupExpense],
        settlements: Iterable[Settlement],
    ) -> List[Transfer]:
        """Who pays whom, and how much, to zero every outstanding balance."""
        remaining = LedgerService.remaining_balances(members, expenses, settlements)
        transfers = LedgerService.plan_settlements(remaining)

        names = {m.member_id: m.name for m in members}
        for transfer in transfers:
            transfer.from_member_name = names.get(transfer.from_member_id, "Unknown")
            transfer.to_member_name = names.get(transfer.to_member_id, "Unknown")

        logger.debug("Debt tree for %d members: %d transfers", len(members), len(transfers))
        return transfers
