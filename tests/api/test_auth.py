"""Tests for auth endpoints (validation, login, registration gate, /me)."""

from unittest.mock import AsyncMock

from httpx import AsyncClient

from app.api.v1.dependencies import (
    get_admin_auth_service,
    get_admin_auth_service_for_write,
    get_admin_user_repo,
)
from app.core.config import get_settings
from app.domain.exceptions import AuthenticationException
from app.infrastructure.security import create_access_token, decode_access_token
from app.main import app
from tests.factories import ADMIN


def _auth_service(**methods) -> AsyncMock:
    service = AsyncMock()
    for name, value in methods.items():
        setattr(service, name, value)
    return service


async def test_login_missing_body_returns_422(client: AsyncClient) -> None:
    response = await client.post("/api/v1/auth/login", json={})
    assert response.status_code == 422
    assert response.json()["error"] == "VALIDATION_ERROR"


async def test_login_invalid_email_returns_422(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/auth/login", json={"email": "not-an-email", "password": "x"}
    )
    assert response.status_code == 422


async def test_login_returns_bearer_token(client: AsyncClient) -> None:
    service = _auth_service(authenticate=AsyncMock(return_value=ADMIN))
    app.dependency_overrides[get_admin_auth_service] = lambda: service

    response = await client.post(
        "/api/v1/auth/login", json={"email": "admin@example.com", "password": "secret123"}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["token_type"] == "bearer"
    assert data["expires_in"] == get_settings().access_token_expire_minutes * 60
    assert decode_access_token(data["access_token"]).admin_id == "a1"


async def test_login_invalid_credentials_returns_401(client: AsyncClient) -> None:
    """Message is generic so callers cannot tell unknown e-mail from wrong password."""
    service = _auth_service(
        authenticate=AsyncMock(side_effect=AuthenticationException("Invalid credentials"))
    )
    app.dependency_overrides[get_admin_auth_service] = lambda: service

    response = await client.post(
        "/api/v1/auth/login", json={"email": "nobody@example.com", "password": "x"}
    )

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid credentials"


async def test_register_disabled_by_default(client: AsyncClient) -> None:
    service = _auth_service()
    app.dependency_overrides[get_admin_auth_service_for_write] = lambda: service

    response = await client.post(
        "/api/v1/auth/register", json={"email": "new@example.com", "password": "secret123"}
    )

    assert response.status_code == 403
    service.register.assert_not_awaited()


async def test_register_short_password_returns_422(client: AsyncClient) -> None:
    app.dependency_overrides[get_admin_auth_service_for_write] = lambda: _auth_service()
    response = await client.post(
        "/api/v1/auth/register", json={"email": "new@example.com", "password": "short"}
    )
    assert response.status_code == 422


async def test_me_without_token_returns_401(client: AsyncClient) -> None:
    app.dependency_overrides[get_admin_user_repo] = lambda: AsyncMock()
    response = await client.get("/api/v1/auth/me")
    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


async def test_me_with_garbage_token_returns_401(client: AsyncClient) -> None:
    app.dependency_overrides[get_admin_user_repo] = lambda: AsyncMock()
    response = await client.get(
        "/api/v1/auth/me", headers={"Authorization": "Bearer not-a-jwt"}
    )
    assert response.status_code == 401


async def test_me_with_valid_token(client: AsyncClient) -> None:
    repo = AsyncMock()
    repo.get_by_id = AsyncMock(return_value=ADMIN)
    app.dependency_overrides[get_admin_user_repo] = lambda: repo
    token = create_access_token("a1", "admin@example.com")

    response = await client.get(
        "/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"}
    )

    assert response.status_code == 200
    assert response.json()["email"] == "admin@example.com"
    repo.get_by_id.assert_awaited_once_with("a1")
