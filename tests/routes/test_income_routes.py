import pytest
from httpx import AsyncClient, ASGITransport
from unittest.mock import MagicMock
from bson import ObjectId
from datetime import datetime, timezone

from fairshare.core.auth import get_current_user
from fairshare.db.mongo import get_db
from fairshare.main import app


@pytest.fixture
def api(mock_db, current_user):
    app.dependency_overrides[get_db] = lambda: mock_db
    app.dependency_overrides[get_current_user] = lambda: current_user
    yield mock_db
    app.dependency_overrides.clear()


def _client():
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


def _stored_income(user_id="user-A", **overrides):
    doc = {
        "_id": ObjectId(),
        "user_id": user_id,
        "amount_cents": 250000,
        "source": "Salary",
        "description": None,
        "date": datetime(2026, 6, 1, tzinfo=timezone.utc),
        "created_at": datetime(2026, 6, 1, tzinfo=timezone.utc),
    }
    doc.update(overrides)
    return doc


@pytest.mark.asyncio
async def test_create_income(api):
    api["incomes"].insert_one.return_value = MagicMock(inserted_id=ObjectId())

    async with _client() as client:
        response = await client.post(
            "/income",
            json={"amount_cents": 250000, "source": "Salary", "date": "2026-06-01T09:00:00Z"},
        )

    assert response.status_code == 201
    data = response.json()
    assert data["source"] == "Salary"
    assert data["description"] is None
    stored = api["incomes"].insert_one.call_args[0][0]
    assert stored["user_id"] == "user-A"
    assert stored["amount_cents"] == 250000


@pytest.mark.asyncio
async def test_create_income_requires_source_and_date(api):
    async with _client() as client:
        response = await client.post("/income", json={"amount_cents": 1000})

    assert response.status_code == 422
    api["incomes"].insert_one.assert_not_called()


@pytest.mark.asyncio
async def test_list_income_newest_first_with_limit(api):
    api["incomes"].find.return_value.to_list.return_value = [_stored_income()]

    async with _client() as client:
        response = await client.get("/income?limit=5")

    assert response.status_code == 200
    assert response.json()[0]["amount_cents"] == 250000
    assert api["incomes"].find.call_args[0][0] == {"user_id": "user-A"}
    api["incomes"].find.return_value.sort.assert_called_once_with("date", -1)
    api["incomes"].find.return_value.limit.assert_called_once_with(5)


@pytest.mark.asyncio
async def test_update_income(api):
    stored = _stored_income()
    api["incomes"].find_one.return_value = stored
    api["incomes"].find_one_and_update.return_value = {**stored, "amount_cents": 260000}

    async with _client() as client:
        response = await client.put(f"/income/{stored['_id']}", json={"amount_cents": 260000})

    assert response.status_code == 200
    assert response.json()["amount_cents"] == 260000
    update = api["incomes"].find_one_and_update.call_args[0][1]["$set"]
    assert update == {"amount_cents": 260000}


@pytest.mark.asyncio
async def test_update_someone_elses_income(api):
    stored = _stored_income(user_id="user-B")
    api["incomes"].find_one.return_value = stored

    async with _client() as client:
        response = await client.put(f"/income/{stored['_id']}", json={"amount_cents": 1})

    assert response.status_code == 403
    api["incomes"].find_one_and_update.assert_not_called()


@pytest.mark.asyncio
async def test_update_missing_income(api):
    async with _client() as client:
        response = await client.put("/income/not-an-id", json={"amount_cents": 1})

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_bulk_delete_only_touches_own_rows(api):
    api["incomes"].delete_many.return_value = MagicMock(deleted_count=2)
    ids = [str(ObjectId()), str(ObjectId())]

    async with _client() as client:
        response = await client.request("DELETE", "/income", json={"ids": ids})

    assert response.status_code == 200
    assert response.json() == {"deleted_count": 2, "message": "Deleted 2 income record(s)"}
    query = api["incomes"].delete_many.call_args[0][0]
    assert query["user_id"] == "user-A"
    assert [str(oid) for oid in query["_id"]["$in"]] == ids


@pytest.mark.asyncio
async def test_bulk_delete_needs_ids(api):
    async with _client() as client:
        response = await client.request("DELETE", "/income", json={"ids": []})

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_personal_stats_route(api):
    async with _client() as client:
        response = await client.get("/personal/stats?month=2026-06-15")

    assert response.status_code == 200
    data = response.json()
    assert data["month"] == "2026-06"
    assert data["total_income_cents"] == 0
    assert data["recent_transactions"] == []
    assert data["budget"]["limit_cents"] == 4100000


@pytest.mark.asyncio
async def test_dashboard_stats_route(api):
    async with _client() as client:
        response = await client.get("/dashboard/stats")

    assert response.status_code == 200
    data = response.json()
    assert data["top_category"] is None
    assert data["alerts"] == []
    assert data["groups"] == []
