import logging

from motor.motor_asyncio import AsyncIOMotorDatabase

from fairshare.db.mongo import transaction
from fairshare.models.group import Group
from fairshare.models.settlement import Settlement
from fairshare.repositories.activity_repo import ActivityRepository
from fairshare.repositories.settlement_repo import SettlementRepository
from fairshare.schemas.settlement import SettlementCreate
from fairshare.services.group_ledger_service import GroupLedgerService
from fairshare.services.ledger_service import LedgerService
from fairshare.utils.ledger_validation import format_cents, validate_settlement

logger = logging.getLogger(__name__)


class SettlementService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.settlements = SettlementRepository(db)
        self.activity = ActivityRepository(db)
        self.ledger = GroupLedgerService(db)

    async def create(self, group: Group, settlement_in: SettlementCreate) -> Settlement:
        """
        Record a payment between two members.

        The payment is stored as given. Paying more than the payer currently
        owes is allowed but logged.
        """
        settlement = Settlement(group_id=group.id, **settlement_in.model_dump())
        validate_settlement(settlement, set(group.member_ids()))

        expenses, settlements = await self.ledger.load(group.id)
        outstanding = LedgerService.remaining_balances(group.members, expenses, settlements)
        owed_by_payer = max(-outstanding.get(settlement.from_member_id, 0), 0)
        if settlement.amount_cents > owed_by_payer:
            logger.warning(
                "Settlement in group %s overpays: %s paid, %s outstanding",
                group.id,
                format_cents(settlement.amount_cents),
                format_cents(owed_by_payer),
            )

        payer = group.find_member(settlement.from_member_id)
        payee = group.find_member(settlement.to_member_id)

        async with transaction(self.db) as session:
            settlement = await self.settlements.create_settlement(settlement, session=session)
            await self.activity.log(
                group.id,
                action="settled",
                entity_type="settlement",
                entity_id=settlement.id,
                details=f"{payer.name} paid {format_cents(settlement.amount_cents)} to {payee.name}",
                session=session,
            )

        logger.info("Settlement %s recorded in group %s", settlement.id, group.id)
        return settlement
