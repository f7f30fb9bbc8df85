import pytest
from unittest.mock import AsyncMock, MagicMock
from bson import ObjectId
from datetime import datetime, timezone

from fairshare.core import config
from fairshare.models.expense import GroupExpense, Split
from fairshare.models.group import Group, Member, MemberRole
from fairshare.models.settlement import Settlement
from fairshare.models.user import UserResponse


@pytest.fixture(autouse=True)
def no_transactions(monkeypatch):
    """Mocked databases have no replica set; run writes without a session."""
    monkeypatch.setattr(config.settings, "MONGODB_TRANSACTIONS", False)


def _mock_collection():
    collection = MagicMock()
    collection.find_one = AsyncMock(return_value=None)
    collection.insert_one = AsyncMock()
    collection.update_one = AsyncMock()
    collection.find_one_and_update = AsyncMock()
    collection.delete_one = AsyncMock()
    collection.delete_many = AsyncMock()
    cursor = MagicMock()
    cursor.sort.return_value = cursor
    cursor.limit.return_value = cursor
    cursor.to_list = AsyncMock(return_value=[])
    collection.find.return_value = cursor
    return collection


@pytest.fixture
def mock_db():
    """Mock MongoDB database; db["name"] always hands back the same mock collection."""
    collections = {}

    def get_collection(name):
        if name not in collections:
            collections[name] = _mock_collection()
        return collections[name]

    db = MagicMock()
    db.__getitem__.side_effect = get_collection
    return db


def make_member(name: str, group_id: str = "g1", role: MemberRole = MemberRole.MEMBER) -> Member:
    return Member(
        member_id=name,
        group_id=group_id,
        user_id=f"user-{name}",
        name=name,
        role=role,
    )


def make_expense(paid_by: str, amount_cents: int, splits: dict, group_id: str = "g1", **kwargs) -> GroupExpense:
    return GroupExpense(
        id=str(ObjectId()),
        group_id=group_id,
        description=kwargs.pop("description", "Dinner"),
        paid_by_member_id=paid_by,
        amount_cents=amount_cents,
        splits=[Split(member_id=m, amount_cents=c) for m, c in splits.items()],
        **kwargs,
    )


def make_settlement(from_member: str, to_member: str, amount_cents: int, group_id: str = "g1") -> Settlement:
    return Settlement(
        id=str(ObjectId()),
        group_id=group_id,
        from_member_id=from_member,
        to_member_id=to_member,
        amount_cents=amount_cents,
    )


@pytest.fixture
def members():
    """A, B and C; A is the admin."""
    return [
        make_member("A", role=MemberRole.ADMIN),
        make_member("B"),
        make_member("C"),
    ]


@pytest.fixture
def group(members):
    return Group(
        id=str(ObjectId()),
        name="Trip",
        created_by=members[0].user_id,
        members=members,
    )


@pytest.fixture
def current_user():
    now = datetime.now(timezone.utc)
    return UserResponse(
        id="user-A",
        name="A",
        email="a@example.com",
        created_at=now,
        updated_at=now,
    )
