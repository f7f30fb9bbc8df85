from typing import List, Optional
from motor.motor_asyncio import AsyncIOMotorDatabase

from fairshare.models.activity import ActivityLog


class ActivityRepository:
    """Append-only activity log per group."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["activity_logs"]

    async def log(
        self,
        group_id: str,
        action: str,
        entity_type: str,
        entity_id: Optional[str],
        details: str,
        session=None,
    ) -> ActivityLog:
        entry = ActivityLog(
            group_id=group_id,
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            details=details,
        )
        result = await self.collection.insert_one(entry.model_dump(exclude={"id"}), session=session)
        entry.id = str(result.inserted_id)
        return entry

    async def list_for_group(self, group_id: str, limit: int = 100) -> List[ActivityLog]:
        cursor = self.collection.find({"group_id": group_id}).sort("created_at", -1).limit(limit)
        docs = await cursor.to_list(None)
        for doc in docs:
            doc["_id"] = str(doc["_id"])
        return [ActivityLog(**doc) for doc in docs]
