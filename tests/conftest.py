"""Pytest configuration and fixtures for snap-intake-hub.

Environment defaults are set before app.main is imported so Settings
validates without a .env file. Uses app.main:app for HTTP tests and
app.infrastructure.persistence.database for DB-dependent fixtures.
"""

import os
import tempfile

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("STORAGE_BACKEND", "local")
os.environ.setdefault("STORAGE_ROOT", tempfile.mkdtemp(prefix="snap-intake-test-"))
os.environ.setdefault("NOTIFICATION_BACKEND", "log")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

import app.infrastructure.persistence.database as database  # noqa: E402
from app.core.limiter import limiter  # noqa: E402
from app.main import app  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_app_state():
    """Clear dependency overrides and rate limit counters between tests."""
    yield
    app.dependency_overrides.clear()
    limiter.reset()


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def db_session() -> AsyncSession:
    """Database session for repository/integration tests. Rolls back after test.

    Requires DATABASE_URL (Postgres, migrated with alembic upgrade head).
    Skips when it is not configured; run without DB via: pytest -m 'not requires_db'.
    """
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        pytest.skip(
            "Postgres not configured: set DATABASE_URL, then run: alembic upgrade head"
        )
    async with database.AsyncSessionLocal() as session:
        yield session
        await session.rollback()
