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


@pytest.mark.asyncio
async def test_create_personal_expense(api):
    api["personal_expenses"].insert_one.return_value = MagicMock(inserted_id=ObjectId())

    async with _client() as client:
        response = await client.post(
            "/personal/expenses",
            json={"description": "Coffee", "amount_cents": 450, "category": "Food", "date": "2026-06-03T08:30:00Z"},
        )

    assert response.status_code == 201
    assert response.json()["amount_cents"] == 450
    stored = api["personal_expenses"].insert_one.call_args[0][0]
    assert stored["user_id"] == "user-A"


@pytest.mark.asyncio
async def test_create_personal_expense_rejects_zero(api):
    async with _client() as client:
        response = await client.post("/personal/expenses", json={"amount_cents": 0})

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_list_personal_expenses_for_month(api):
    async with _client() as client:
        response = await client.get("/personal/expenses?month=2026-06-15")

    assert response.status_code == 200
    query = api["personal_expenses"].find.call_args[0][0]
    assert query["date"]["$gte"] == datetime(2026, 6, 1, tzinfo=timezone.utc)


@pytest.mark.asyncio
async def test_delete_missing_personal_expense(api):
    api["personal_expenses"].delete_one.return_value = MagicMock(deleted_count=0)

    async with _client() as client:
        response = await client.delete(f"/personal/expenses/{ObjectId()}")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_analyze_route(api):
    async with _client() as client:
        response = await client.get("/insights/analyze")

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["user_id"] == "user-A"
    assert data["signals"] == []


@pytest.mark.asyncio
async def test_monthly_breakdown_route(api):
    async with _client() as client:
        response = await client.get("/insights/monthly-breakdown")

    assert response.status_code == 200
    assert response.json() == []
