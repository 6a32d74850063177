"""Administrator repository (session provider). Returns application DTOs."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.admin_user import AdminUserResult
from app.domain.exceptions import DuplicateResourceException
from app.infrastructure.persistence.models.admin_user import AdminUser
from app.infrastructure.persistence.repositories.base import BaseRepository


def _to_result(a: AdminUser) -> AdminUserResult:
    """Map ORM AdminUser to AdminUserResult (no password)."""
    return AdminUserResult(id=a.id, email=a.email, is_active=a.is_active)


class AdminUserRepository(BaseRepository[AdminUser]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, AdminUser)

    async def _get_row_by_email(self, email: str) -> AdminUser | None:
        result = await self.db.execute(
            select(AdminUser).where(func.lower(AdminUser.email) == email.strip().lower())
        )
        return result.scalar_one_or_none()

    async def get_by_id(self, admin_id: str) -> AdminUserResult | None:  # type: ignore[override]
        row = await super().get_by_id(admin_id)
        return _to_result(row) if row else None

    async def get_by_email(self, email: str) -> AdminUserResult | None:
        row = await self._get_row_by_email(email)
        return _to_result(row) if row else None

    async def get_password_hash(self, email: str) -> tuple[AdminUserResult, str] | None:
        row = await self._get_row_by_email(email)
        return (_to_result(row), row.hashed_password) if row else None

    async def create_admin(self, email: str, hashed_password: str) -> AdminUserResult:
        """Create administrator; raise DuplicateResourceException if the email is taken."""
        admin = AdminUser(
            email=email.strip().lower(), hashed_password=hashed_password, is_active=True
        )
        try:
            created = await self.create(admin)
        except IntegrityError:
            raise DuplicateResourceException("admin_user", email)
        return _to_result(created)
