"""Tests for authentication endpoints."""

import pytest
from httpx import AsyncClient

from zenith.core.config import settings


async def _register_and_login(client: AsyncClient, data: dict) -> dict:
    await client.post("/api/v1/auth/register", json=data)
    response = await client.post(
        "/api/v1/auth/login",
        json={"email": data["email"], "password": data["password"]},
    )
    return response.json()


@pytest.mark.asyncio
async def test_register_user(client: AsyncClient, mock_user_data):
    """Test user registration."""
    response = await client.post("/api/v1/auth/register", json=mock_user_data)

    assert response.status_code == 201
    data = response.json()
    assert data["email"] == mock_user_data["email"]
    assert data["first_name"] == mock_user_data["first_name"]
    assert data["full_name"] == "Lerato Mokoena"
    assert data["role"] == "student"
    assert data["admin_verified"] is False
    assert "id" in data
    assert "hashed_password" not in data


@pytest.mark.asyncio
async def test_register_duplicate_email(client: AsyncClient, mock_user_data):
    """Registering the same email twice is a conflict, whatever the case."""
    await client.post("/api/v1/auth/register", json=mock_user_data)

    mock_user_data["email"] = mock_user_data["email"].upper()
    response = await client.post("/api/v1/auth/register", json=mock_user_data)

    assert response.status_code == 409
    assert "already registered" in response.json()["detail"].lower()


@pytest.mark.asyncio
async def test_register_short_password(client: AsyncClient, mock_user_data):
    mock_user_data["password"] = "short"
    response = await client.post("/api/v1/auth/register", json=mock_user_data)
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_register_allowlisted_email_becomes_admin(
    client: AsyncClient, mock_user_data, monkeypatch
):
    monkeypatch.setattr(settings, "ADMIN_EMAIL_ALLOWLIST", "NewStudent@example.com")

    response = await client.post("/api/v1/auth/register", json=mock_user_data)

    assert response.status_code == 201
    assert response.json()["role"] == "admin"


@pytest.mark.asyncio
async def test_login_success(client: AsyncClient, mock_user_data):
    """Login returns tokens, the user and a session cookie."""
    await client.post("/api/v1/auth/register", json=mock_user_data)

    response = await client.post(
        "/api/v1/auth/login",
        json={"email": mock_user_data["email"], "password": mock_user_data["password"]},
    )

    assert response.status_code == 200
    data = response.json()
    assert "access_token" in data
    assert "refresh_token" in data
    assert data["token_type"] == "bearer"
    assert data["user"]["email"] == mock_user_data["email"]
    assert settings.AUTH_COOKIE_NAME in response.cookies


@pytest.mark.asyncio
async def test_login_wrong_password(client: AsyncClient, mock_user_data):
    """Test login with wrong password fails."""
    await client.post("/api/v1/auth/register", json=mock_user_data)

    response = await client.post(
        "/api/v1/auth/login",
        json={"email": mock_user_data["email"], "password": "wrongpassword"},
    )

    assert response.status_code == 401
    assert response.json()["error_code"] == "not_authenticated"
    assert response.headers["www-authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_get_current_user(client: AsyncClient, mock_user_data):
    """Test getting current user with valid token."""
    tokens = await _register_and_login(client, mock_user_data)

    response = await client.get(
        "/api/v1/auth/me",
        headers={"Authorization": f"Bearer {tokens['access_token']}"},
    )

    assert response.status_code == 200
    assert response.json()["email"] == mock_user_data["email"]


@pytest.mark.asyncio
async def test_get_current_user_from_cookie(client: AsyncClient, mock_user_data):
    tokens = await _register_and_login(client, mock_user_data)
    client.cookies.clear()

    response = await client.get(
        "/api/v1/auth/me",
        headers={"Cookie": f"{settings.AUTH_COOKIE_NAME}={tokens['access_token']}"},
    )

    assert response.status_code == 200
    assert response.json()["email"] == mock_user_data["email"]


@pytest.mark.asyncio
async def test_me_requires_authentication(client: AsyncClient):
    response = await client.get("/api/v1/auth/me")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_me_rejects_refresh_token(client: AsyncClient, mock_user_data):
    tokens = await _register_and_login(client, mock_user_data)
    client.cookies.clear()

    response = await client.get(
        "/api/v1/auth/me",
        headers={"Authorization": f"Bearer {tokens['refresh_token']}"},
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_refresh_token(client: AsyncClient, mock_user_data):
    """Test token refresh."""
    tokens = await _register_and_login(client, mock_user_data)

    response = await client.post(
        "/api/v1/auth/refresh",
        json={"refresh_token": tokens["refresh_token"]},
    )

    assert response.status_code == 200
    data = response.json()
    assert "access_token" in data
    assert "refresh_token" in data


@pytest.mark.asyncio
async def test_refresh_rejects_access_token(client: AsyncClient, mock_user_data):
    tokens = await _register_and_login(client, mock_user_data)

    response = await client.post(
        "/api/v1/auth/refresh",
        json={"refresh_token": tokens["access_token"]},
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_logout_clears_cookie(client: AsyncClient):
    response = await client.post("/api/v1/auth/logout")

    assert response.status_code == 200
    assert settings.AUTH_COOKIE_NAME in response.headers.get("set-cookie", "")


@pytest.mark.asyncio
async def test_disabled_account_cannot_login(client: AsyncClient, db_session, student):
    student.is_active = False
    await db_session.flush()

    response = await client.post(
        "/api/v1/auth/login",
        json={"email": student.email, "password": "password123"},
    )

    assert response.status_code == 401
