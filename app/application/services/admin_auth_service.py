"""Administrator login and (optional) self-registration."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from app.domain.exceptions import (
    AuthenticationException,
    DuplicateResourceException,
    ValidationException,
)
from app.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from app.application.dtos.admin_user import AdminUserResult
    from app.application.interfaces.repositories import IAdminUserRepository
    from app.application.interfaces.services import IPasswordHasher

logger = get_logger(__name__)

MIN_PASSWORD_LENGTH = 8


class AdminAuthService:
    """Verifies administrator credentials. Hashing runs in a worker thread."""

    def __init__(
        self,
        admin_repo: IAdminUserRepository,
        hasher: IPasswordHasher,
    ) -> None:
        self._admin_repo = admin_repo
        self._hasher = hasher
        self._dummy_hash: str | None = None

    async def _get_dummy_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = await asyncio.to_thread(
                self._hasher.hash, "not-a-real-password"
            )
        return self._dummy_hash

    async def authenticate(self, email: str, password: str) -> AdminUserResult:
        """Return the administrator for valid credentials.

        Unknown e-mail, wrong password and inactive account all raise the
        same exception; an unknown e-mail still pays for one hash check.

        Raises:
            AuthenticationException: credentials rejected.
        """
        found = await self._admin_repo.get_password_hash((email or "").strip())
        if found is None:
            await asyncio.to_thread(
                self._hasher.verify, password, await self._get_dummy_hash()
            )
            raise AuthenticationException("Invalid credentials")
        admin, hashed = found
        if not await asyncio.to_thread(self._hasher.verify, password, hashed):
            raise AuthenticationException("Invalid credentials")
        if not admin.is_active:
            raise AuthenticationException("Invalid credentials")
        logger.info("Administrator %s logged in", admin.id)
        return admin

    async def register(self, email: str, password: str) -> AdminUserResult:
        """Create an administrator account.

        Raises:
            ValidationException: e-mail empty or password too short.
            DuplicateResourceException: e-mail already registered.
        """
        address = (email or "").strip().lower()
        if not address:
            raise ValidationException("E-mail is required", field="email")
        if len(password or "") < MIN_PASSWORD_LENGTH:
            raise ValidationException(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
                field="password",
            )
        if await self._admin_repo.get_by_email(address) is not None:
            raise DuplicateResourceException("admin_user", address)
        hashed = await asyncio.to_thread(self._hasher.hash, password)
        admin = await self._admin_repo.create_admin(address, hashed)
        logger.info("Administrator %s registered", admin.id)
        return admin
