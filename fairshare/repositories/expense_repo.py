"""
ExpenseRepository - group expenses with embedded splits.

Edits replace the whole split array; deletes only flip status to DELETED.
"""

from typing import List, Optional
from datetime import datetime, timezone
from motor.motor_asyncio import AsyncIOMotorDatabase
from bson import ObjectId
from bson.errors import InvalidId

from fairshare.models.expense import ExpenseStatus, GroupExpense, Split


def _to_expense(doc: dict) -> GroupExpense:
    doc["_id"] = str(doc["_id"])
    return GroupExpense(**doc)


def _oid(expense_id: str) -> Optional[ObjectId]:
    try:
        return ObjectId(expense_id)
    except (InvalidId, TypeError):
        return None


class ExpenseRepository:
    """Repository for shared group expenses."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["group_expenses"]

    async def create_expense(self, expense: GroupExpense, session=None) -> GroupExpense:
        now = datetime.now(timezone.utc)
        expense.created_at = now
        expense.updated_at = now
        doc = expense.model_dump(exclude={"id"})
        result = await self.collection.insert_one(doc, session=session)
        expense.id = str(result.inserted_id)
        return expense

    async def get_expense(self, group_id: str, expense_id: str) -> Optional[GroupExpense]:
        oid = _oid(expense_id)
        if oid is None:
            return None
        doc = await self.collection.find_one({
            "_id": oid,
            "group_id": group_id,
            "status": ExpenseStatus.ACTIVE.value,
        })
        if doc:
            return _to_expense(doc)
        return None

    async def list_active(self, group_id: str, session=None) -> List[GroupExpense]:
        cursor = self.collection.find(
            {"group_id": group_id, "status": ExpenseStatus.ACTIVE.value},
            session=session,
        ).sort("date", -1)
        docs = await cursor.to_list(None)
        return [_to_expense(doc) for doc in docs]

    async def replace_expense(
        self,
        group_id: str,
        expense_id: str,
        description: str,
        amount_cents: int,
        category: str,
        paid_by_member_id: str,
        date: datetime,
        splits: List[Split],
        session=None,
    ) -> Optional[GroupExpense]:
        """Overwrite the editable fields and swap in the new split set."""
        result = await self.collection.find_one_and_update(
            {"_id": ObjectId(expense_id), "group_id": group_id, "status": ExpenseStatus.ACTIVE.value},
            {"$set": {
                "description": description,
                "amount_cents": amount_cents,
                "category": category,
                "paid_by_member_id": paid_by_member_id,
                "date": date,
                "splits": [s.model_dump() for s in splits],
                "updated_at": datetime.now(timezone.utc),
            }},
            return_document=True,
            session=session,
        )
        if result:
            return _to_expense(result)
        return None

    async def soft_delete(self, group_id: str, expense_id: str, session=None) -> bool:
        oid = _oid(expense_id)
        if oid is None:
            return False
        result = await self.collection.update_one(
            {"_id": oid, "group_id": group_id, "status": ExpenseStatus.ACTIVE.value},
            {"$set": {
                "status": ExpenseStatus.DELETED.value,
                "updated_at": datetime.now(timezone.utc),
            }},
            session=session,
        )
        return result.modified_count > 0
