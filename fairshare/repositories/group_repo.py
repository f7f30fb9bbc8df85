"""
GroupRepository - groups with embedded memberships.

Deleting a group cascades to its expenses, settlements and activity log.
"""

from typing import List, Optional
from datetime import datetime, timezone
from motor.motor_asyncio import AsyncIOMotorDatabase
from bson import ObjectId
from bson.errors import InvalidId

from fairshare.models.group import Group, Member, MemberRole, MemberStatus


def _to_group(doc: dict) -> Group:
    doc["_id"] = str(doc["_id"])
    return Group(**doc)


def _oid(group_id: str) -> Optional[ObjectId]:
    try:
        return ObjectId(group_id)
    except (InvalidId, TypeError):
        return None


class GroupRepository:
    """Repository for groups and their members."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["groups"]

    async def create_group(
        self,
        name: str,
        description: Optional[str],
        creator_id: str,
        creator_name: str,
        session=None,
    ) -> Group:
        """Create a group; the creator joins as an active admin."""
        now = datetime.now(timezone.utc)
        group_oid = ObjectId()
        creator = Member(
            member_id=str(ObjectId()),
            group_id=str(group_oid),
            user_id=creator_id,
            name=creator_name,
            role=MemberRole.ADMIN,
            status=MemberStatus.ACTIVE,
            joined_at=now,
        )
        doc = {
            "_id": group_oid,
            "name": name,
            "description": description,
            "created_by": creator_id,
            "members": [creator.model_dump()],
            "created_at": now,
            "updated_at": now,
        }
        await self.collection.insert_one(doc, session=session)
        return _to_group(doc)

    async def get_group(self, group_id: str) -> Optional[Group]:
        oid = _oid(group_id)
        if oid is None:
            return None
        doc = await self.collection.find_one({"_id": oid})
        if doc:
            return _to_group(doc)
        return None

    async def list_groups_for_user(self, user_id: str) -> List[Group]:
        cursor = self.collection.find({"members.user_id": user_id}).sort("created_at", -1)
        docs = await cursor.to_list(None)
        return [_to_group(doc) for doc in docs]

    async def add_member(
        self,
        group_id: str,
        user_id: str,
        name: str,
        role: MemberRole = MemberRole.MEMBER,
        status: MemberStatus = MemberStatus.PENDING,
        session=None,
    ) -> Member:
        member = Member(
            member_id=str(ObjectId()),
            group_id=group_id,
            user_id=user_id,
            name=name,
            role=role,
            status=status,
        )
        await self.collection.update_one(
            {"_id": ObjectId(group_id)},
            {
                "$push": {"members": member.model_dump()},
                "$set": {"updated_at": datetime.now(timezone.utc)},
            },
            session=session,
        )
        return member

    async def update_member(self, group_id: str, member_id: str, session=None, **fields) -> Optional[Group]:
        """Update status/role of one embedded member."""
        updates = {
            f"members.$.{key}": value.value if hasattr(value, "value") else value
            for key, value in fields.items()
        }
        updates["updated_at"] = datetime.now(timezone.utc)
        result = await self.collection.find_one_and_update(
            {"_id": ObjectId(group_id), "members.member_id": member_id},
            {"$set": updates},
            return_document=True,
            session=session,
        )
        if result:
            return _to_group(result)
        return None

    async def delete_group(self, group_id: str, session=None) -> bool:
        """
        Hard delete the group and everything recorded in it.

        Pass a transaction session so the cascade is all-or-nothing.
        """
        oid = _oid(group_id)
        if oid is None:
            return False
        await self.db["group_expenses"].delete_many({"group_id": group_id}, session=session)
        await self.db["group_settlements"].delete_many({"group_id": group_id}, session=session)
        await self.db["activity_logs"].delete_many({"group_id": group_id}, session=session)
        result = await self.collection.delete_one({"_id": oid}, session=session)
        return result.deleted_count > 0
