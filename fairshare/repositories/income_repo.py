from typing import List, Optional
from datetime import datetime
from motor.motor_asyncio import AsyncIOMotorDatabase
from bson import ObjectId
from bson.errors import InvalidId

from fairshare.models.income import Income


def _to_income(doc: dict) -> Income:
    doc["_id"] = str(doc["_id"])
    return Income(**doc)


def _oids(ids: List[str]) -> List[ObjectId]:
    """Parse ids, dropping anything that is not an ObjectId."""
    oids = []
    for income_id in ids:
        try:
            oids.append(ObjectId(income_id))
        except (InvalidId, TypeError):
            continue
    return oids


class IncomeRepository:
    """A user's income rows."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["incomes"]

    async def create_income(self, income: Income) -> Income:
        result = await self.collection.insert_one(income.model_dump(exclude={"id"}))
        income.id = str(result.inserted_id)
        return income

    async def get_income(self, income_id: str) -> Optional[Income]:
        oids = _oids([income_id])
        if not oids:
            return None
        doc = await self.collection.find_one({"_id": oids[0]})
        if doc:
            return _to_income(doc)
        return None

    async def list_for_user(
        self,
        user_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> List[Income]:
        """Rows for a user, newest first, optionally bounded by date."""
        query: dict = {"user_id": user_id}
        date_range = {}
        if start is not None:
            date_range["$gte"] = start
        if end is not None:
            date_range["$lte"] = end
        if date_range:
            query["date"] = date_range

        cursor = self.collection.find(query).sort("date", -1)
        if limit:
            cursor = cursor.limit(limit)
        docs = await cursor.to_list(None)
        return [_to_income(doc) for doc in docs]

    async def update_income(self, income_id: str, **fields) -> Optional[Income]:
        result = await self.collection.find_one_and_update(
            {"_id": ObjectId(income_id)},
            {"$set": fields},
            return_document=True,
        )
        if result:
            return _to_income(result)
        return None

    async def delete_many(self, user_id: str, ids: List[str]) -> int:
        """Delete the listed rows the user owns; returns how many went."""
        oids = _oids(ids)
        if not oids:
            return 0
        result = await self.collection.delete_many({"_id": {"$in": oids}, "user_id": user_id})
        return result.deleted_count
