"""AdminAuthService: login and registration with a fake hasher."""

from unittest.mock import AsyncMock

import pytest

from app.application.dtos.admin_user import AdminUserResult
from app.application.services.admin_auth_service import AdminAuthService
from app.domain.exceptions import (
    AuthenticationException,
    DuplicateResourceException,
    ValidationException,
)
from tests.factories import ADMIN


class _PlainHasher:
    """Reversible stand-in for bcrypt so tests stay fast."""

    def __init__(self) -> None:
        self.verify_calls = 0

    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        self.verify_calls += 1
        return hashed == f"hashed:{password}"




async def test_authenticate_success() -> None:
    repo = AsyncMock()
    repo.get_password_hash = AsyncMock(return_value=(ADMIN, "hashed:secret123"))
    admin = await AdminAuthService(repo, _PlainHasher()).authenticate(
        "admin@example.com", "secret123"
    )
    assert admin.id == "a1"


async def test_unknown_email_still_checks_a_hash() -> None:
    repo = AsyncMock()
    repo.get_password_hash = AsyncMock(return_value=None)
    hasher = _PlainHasher()
    with pytest.raises(AuthenticationException, match="Invalid credentials"):
        await AdminAuthService(repo, hasher).authenticate("nobody@example.com", "x")
    assert hasher.verify_calls == 1


async def test_wrong_password_and_inactive_share_message() -> None:
    repo = AsyncMock()
    repo.get_password_hash = AsyncMock(return_value=(ADMIN, "hashed:other"))
    with pytest.raises(AuthenticationException) as wrong:
        await AdminAuthService(repo, _PlainHasher()).authenticate("admin@example.com", "x")

    inactive = AdminUserResult(id="a1", email="admin@example.com", is_active=False)
    repo.get_password_hash = AsyncMock(return_value=(inactive, "hashed:x"))
    with pytest.raises(AuthenticationException) as disabled:
        await AdminAuthService(repo, _PlainHasher()).authenticate("admin@example.com", "x")

    assert wrong.value.message == disabled.value.message


async def test_register_lowercases_and_hashes() -> None:
    repo = AsyncMock()
    repo.get_by_email = AsyncMock(return_value=None)
    repo.create_admin = AsyncMock(return_value=ADMIN)
    await AdminAuthService(repo, _PlainHasher()).register(" Admin@Example.com ", "secret123")
    repo.create_admin.assert_awaited_once_with("admin@example.com", "hashed:secret123")


async def test_register_short_password() -> None:
    with pytest.raises(ValidationException):
        await AdminAuthService(AsyncMock(), _PlainHasher()).register("a@example.com", "short")


async def test_register_duplicate() -> None:
    repo = AsyncMock()
    repo.get_by_email = AsyncMock(return_value=ADMIN)
    with pytest.raises(DuplicateResourceException):
        await AdminAuthService(repo, _PlainHasher()).register("admin@example.com", "secret123")
