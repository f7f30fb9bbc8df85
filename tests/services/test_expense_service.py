import pytest
from unittest.mock import MagicMock
from bson import ObjectId

from fairshare.schemas.expense import ExpenseCreate
from fairshare.services.expense_service import ExpenseService, build_splits
from fairshare.utils.ledger_validation import LedgerValidationError

from conftest import make_expense


@pytest.fixture
def inserting_db(mock_db):
    mock_db["group_expenses"].insert_one.return_value = MagicMock(inserted_id=ObjectId())
    mock_db["activity_logs"].insert_one.return_value = MagicMock(inserted_id=ObjectId())
    return mock_db


def test_build_splits_equal_split_hands_out_remainder():
    payload = ExpenseCreate(
        description="Taxi", amount_cents=1000, paid_by_member_id="A", split_between=["A", "B", "C"]
    )

    splits = build_splits(payload)

    assert [s.amount_cents for s in splits] == [334, 333, 333]


def test_build_splits_prefers_explicit_splits():
    payload = ExpenseCreate(
        description="Taxi",
        amount_cents=1000,
        paid_by_member_id="A",
        splits=[{"member_id": "B", "amount_cents": 1000}],
        split_between=["A", "B"],
    )

    assert [(s.member_id, s.amount_cents) for s in build_splits(payload)] == [("B", 1000)]


def test_build_splits_requires_a_split():
    payload = ExpenseCreate(description="Taxi", amount_cents=1000, paid_by_member_id="A")

    with pytest.raises(LedgerValidationError):
        build_splits(payload)


@pytest.mark.asyncio
async def test_create_expense_inserts_and_logs(inserting_db, group):
    payload = ExpenseCreate(
        description="Dinner", amount_cents=9000, paid_by_member_id="A", split_between=["A", "B", "C"]
    )

    expense = await ExpenseService(inserting_db).create(group, "A", "user-A", payload)

    assert expense.id is not None
    assert expense.group_id == group.id
    assert expense.split_total_cents() == 9000

    doc = inserting_db["group_expenses"].insert_one.call_args[0][0]
    assert doc["status"] == "ACTIVE"
    assert len(doc["splits"]) == 3

    log_doc = inserting_db["activity_logs"].insert_one.call_args[0][0]
    assert log_doc["action"] == "created"
    assert "Amount: $90.00" in log_doc["details"]
    assert "Split 3 ways" in log_doc["details"]


@pytest.mark.asyncio
async def test_create_expense_rejects_bad_splits(inserting_db, group):
    payload = ExpenseCreate(
        description="Dinner",
        amount_cents=9000,
        paid_by_member_id="A",
        splits=[{"member_id": "A", "amount_cents": 3000}, {"member_id": "B", "amount_cents": 3000}],
    )

    with pytest.raises(LedgerValidationError, match="Split total"):
        await ExpenseService(inserting_db).create(group, "A", "user-A", payload)

    inserting_db["group_expenses"].insert_one.assert_not_called()
    inserting_db["activity_logs"].insert_one.assert_not_called()


@pytest.mark.asyncio
async def test_create_expense_rejects_one_cent_short(inserting_db, group):
    payload = ExpenseCreate(
        description="Taxi",
        amount_cents=1000,
        paid_by_member_id="A",
        splits=[{"member_id": m, "amount_cents": 333} for m in ("A", "B", "C")],
    )

    with pytest.raises(LedgerValidationError, match="Split total"):
        await ExpenseService(inserting_db).create(group, "A", "user-A", payload)

    inserting_db["group_expenses"].insert_one.assert_not_called()


@pytest.mark.asyncio
async def test_update_expense_replaces_splits_and_describes_changes(inserting_db, group):
    existing = make_expense("A", 9000, {"A": 3000, "B": 3000, "C": 3000}, group_id=group.id)
    stored = existing.model_dump(exclude={"id"})
    stored.update({"_id": ObjectId(existing.id), "amount_cents": 6000, "description": "Lunch"})
    stored["splits"] = [{"member_id": "A", "amount_cents": 3000}, {"member_id": "B", "amount_cents": 3000}]
    inserting_db["group_expenses"].find_one_and_update.return_value = stored

    payload = ExpenseCreate(
        description="Lunch", amount_cents=6000, paid_by_member_id="A", split_between=["A", "B"]
    )
    updated = await ExpenseService(inserting_db).update(group, "A", existing, payload)

    assert updated.amount_cents == 6000
    update_doc = inserting_db["group_expenses"].find_one_and_update.call_args[0][1]["$set"]
    assert update_doc["splits"] == [
        {"member_id": "A", "amount_cents": 3000},
        {"member_id": "B", "amount_cents": 3000},
    ]

    details = inserting_db["activity_logs"].insert_one.call_args[0][0]["details"]
    assert 'description from "Dinner" to "Lunch"' in details
    assert "amount from $90.00 to $60.00" in details


@pytest.mark.asyncio
async def test_delete_expense_is_logical(inserting_db, group):
    existing = make_expense("A", 9000, {"A": 3000, "B": 3000, "C": 3000}, group_id=group.id)
    inserting_db["group_expenses"].update_one.return_value = MagicMock(modified_count=1)

    deleted = await ExpenseService(inserting_db).delete(group, "A", existing)

    assert deleted is True
    update = inserting_db["group_expenses"].update_one.call_args[0][1]
    assert update["$set"]["status"] == "DELETED"
    assert inserting_db["activity_logs"].insert_one.call_args[0][0]["action"] == "deleted"
