"""
Ledger models - derived, never stored.

MemberBalance is recomputed from expenses, splits and settlements on every
read. Transfer is one entry of a settlement plan (debt tree).
All amounts in integer cents.
"""

from pydantic import BaseModel


class MemberBalance(BaseModel):
    """
    Net position of one member.

    balance_cents = total_paid - total_owed + settlements_received - settlements_paid
    outstanding_cents = total_paid - total_owed - settlements_received + settlements_paid

    Positive = owed money, negative = owes money.
    """
    member_id: str
    name: str = "Unknown"
    balance_cents: int = 0
    total_paid_cents: int = 0
    total_owed_cents: int = 0
    settlements_received_cents: int = 0
    settlements_paid_cents: int = 0
    outstanding_cents: int = 0


class Transfer(BaseModel):
    """Debtor pays creditor amount_cents."""
    from_member_id: str
    to_member_id: str
    amount_cents: int
    from_member_name: str = "Unknown"
    to_member_name: str = "Unknown"
