from typing import List
from motor.motor_asyncio import AsyncIOMotorDatabase

from fairshare.models.settlement import Settlement


class SettlementRepository:
    """Repository for recorded member-to-member payments (insert and read only)."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["group_settlements"]

    async def create_settlement(self, settlement: Settlement, session=None) -> Settlement:
        doc = settlement.model_dump(exclude={"id"})
        result = await self.collection.insert_one(doc, session=session)
        settlement.id = str(result.inserted_id)
        return settlement

    async def list_for_group(self, group_id: str, session=None) -> List[Settlement]:
        cursor = self.collection.find({"group_id": group_id}, session=session).sort("created_at", -1)
        docs = await cursor.to_list(None)
        for doc in docs:
            doc["_id"] = str(doc["_id"])
        return [Settlement(**doc) for doc in docs]
