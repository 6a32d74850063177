"""Smoke tests for health and app wiring."""

import pytest
from httpx import AsyncClient

from app.core.config import get_settings


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /api/v1/health returns 200 and status ok."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json().get("status") == "ok"


async def test_ready_without_database_returns_503(client: AsyncClient) -> None:
    if get_settings().database_url:
        pytest.skip("DATABASE_URL is set")
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 503
    assert response.json() == {"status": "not_ready", "database": "not_configured"}


async def test_root_returns_html(client: AsyncClient) -> None:
    """GET / returns HTML landing page."""
    response = await client.get("/")
    assert response.status_code == 200
    assert "text/html" in response.headers.get("content-type", "")


async def test_response_carries_request_id(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health", headers={"X-Request-ID": "abc-1"})
    assert response.headers["x-request-id"] == "abc-1"
