from typing import List, Optional
from datetime import datetime
from motor.motor_asyncio import AsyncIOMotorDatabase
from bson import ObjectId
from bson.errors import InvalidId

from fairshare.models.personal_expense import PersonalExpense


class PersonalExpenseRepository:
    """A user's own spending rows."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["personal_expenses"]

    async def create_expense(self, expense: PersonalExpense) -> PersonalExpense:
        result = await self.collection.insert_one(expense.model_dump(exclude={"id"}))
        expense.id = str(result.inserted_id)
        return expense

    async def list_for_user(
        self,
        user_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[PersonalExpense]:
        """Rows for a user, oldest first, optionally bounded by date."""
        query: dict = {"user_id": user_id}
        date_range = {}
        if start is not None:
            date_range["$gte"] = start
        if end is not None:
            date_range["$lte"] = end
        if date_range:
            query["date"] = date_range

        cursor = self.collection.find(query).sort("date", 1)
        docs = await cursor.to_list(None)
        for doc in docs:
            doc["_id"] = str(doc["_id"])
        return [PersonalExpense(**doc) for doc in docs]

    async def delete_expense(self, user_id: str, expense_id: str) -> bool:
        try:
            oid = ObjectId(expense_id)
        except (InvalidId, TypeError):
            return False
        result = await self.collection.delete_one({"_id": oid, "user_id": user_id})
        return result.deleted_count > 0
