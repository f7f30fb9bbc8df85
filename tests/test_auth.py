"""
Test authentication endpoints
"""
import pytest
from httpx import AsyncClient, ASGITransport
from unittest.mock import MagicMock
from bson import ObjectId
from datetime import datetime, timezone

from fairshare.core.security import hash_password
from fairshare.db.mongo import get_db
from fairshare.main import app


@pytest.fixture
def client_db(mock_db):
    app.dependency_overrides[get_db] = lambda: mock_db
    yield mock_db
    app.dependency_overrides.clear()


def _user_doc(email, password="loginpass123", user_id=None):
    now = datetime.now(timezone.utc)
    return {
        "_id": user_id or ObjectId(),
        "email": email,
        "name": "Login Test",
        "password_hash": hash_password(password),
        "is_deleted": False,
        "created_at": now,
        "updated_at": now
    }


@pytest.mark.asyncio
async def test_signup(client_db):
    client_db["users"].insert_one.return_value = MagicMock(inserted_id=ObjectId("507f1f77bcf86cd799439011"))

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.post(
            "/auth/signup",
            json={
                "name": "Test User",
                "email": "test@example.com",
                "password": "testpassword123"
            }
        )
    assert response.status_code == 201
    data = response.json()
    assert "access_token" in data
    assert data["token_type"] == "bearer"
    assert data["user"]["id"] == "507f1f77bcf86cd799439011"
    assert data["user"]["email"] == "test@example.com"

    stored = client_db["users"].insert_one.call_args[0][0]
    assert stored["password_hash"] != "testpassword123"


@pytest.mark.asyncio
async def test_signup_duplicate_email(client_db):
    client_db["users"].find_one.return_value = _user_doc("duplicate@example.com")

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.post(
            "/auth/signup",
            json={
                "name": "User Two",
                "email": "duplicate@example.com",
                "password": "password456"
            }
        )
    assert response.status_code == 400
    assert "already registered" in response.json()["detail"].lower()


@pytest.mark.asyncio
async def test_signup_short_password(client_db):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.post(
            "/auth/signup",
            json={"name": "Short", "email": "short@example.com", "password": "short"}
        )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_login(client_db):
    client_db["users"].find_one.return_value = _user_doc("login@example.com")

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.post(
            "/auth/login",
            data={"email": "login@example.com", "password": "loginpass123"}
        )
    assert response.status_code == 200
    data = response.json()
    assert "access_token" in data
    assert data["user"]["email"] == "login@example.com"


@pytest.mark.asyncio
async def test_login_wrong_password(client_db):
    client_db["users"].find_one.return_value = _user_doc("wrongpass@example.com", password="correctpass123")

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.post(
            "/auth/login",
            data={"email": "wrongpass@example.com", "password": "wrongpassword"}
        )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_get_current_user(client_db):
    user_id = ObjectId("507f1f77bcf86cd799439011")
    client_db["users"].insert_one.return_value = MagicMock(inserted_id=user_id)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        signup_response = await client.post(
            "/auth/signup",
            json={
                "name": "Current User Test",
                "email": "currentuser@example.com",
                "password": "password123"
            }
        )
        token = signup_response.json()["access_token"]

        user_doc = _user_doc("currentuser@example.com", user_id=user_id)
        user_doc["name"] = "Current User Test"
        client_db["users"].find_one.return_value = user_doc
        response = await client.get(
            "/auth/me",
            headers={"Authorization": f"Bearer {token}"}
        )
    assert response.status_code == 200
    data = response.json()
    assert data["id"] == str(user_id)
    assert data["email"] == "currentuser@example.com"
    assert data["name"] == "Current User Test"


@pytest.mark.asyncio
async def test_unauthorized_access():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get("/auth/me")
    # 403 on older FastAPI releases
    assert response.status_code in (401, 403)


@pytest.mark.asyncio
async def test_invalid_token(client_db):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get(
            "/auth/me",
            headers={"Authorization": "Bearer not-a-token"}
        )
    assert response.status_code == 401
