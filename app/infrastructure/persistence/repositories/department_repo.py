"""Department repository. Returns application DTOs."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.department import DepartmentResult
from app.domain.exceptions import DuplicateResourceException
from app.infrastructure.persistence.models.department import Department
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.utils.datetime import ensure_utc


def _to_result(d: Department) -> DepartmentResult:
    return DepartmentResult(id=d.id, name=d.name, created_at=ensure_utc(d.created_at))


class DepartmentRepository(BaseRepository[Department]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Department)

    async def get_by_id(self, department_id: str) -> DepartmentResult | None:  # type: ignore[override]
        row = await super().get_by_id(department_id)
        return _to_result(row) if row else None

    async def get_by_name(self, name: str) -> DepartmentResult | None:
        result = await self.db.execute(select(Department).where(Department.name == name))
        row = result.scalar_one_or_none()
        return _to_result(row) if row else None

    async def list_departments(self, limit: int = 1000) -> list[DepartmentResult]:
        result = await self.db.execute(
            select(Department).order_by(Department.name.asc()).limit(limit)
        )
        return [_to_result(d) for d in result.scalars().all()]

    async def create_department(self, name: str) -> DepartmentResult:
        """Create department; raise DuplicateResourceException on unique name violation."""
        try:
            created = await self.create(Department(name=name))
        except IntegrityError:
            raise DuplicateResourceException("department", name)
        return _to_result(created)

    async def rename_department(
        self, department_id: str, name: str
    ) -> DepartmentResult | None:
        row = await super().get_by_id(department_id)
        if not row:
            return None
        row.name = name
        try:
            updated = await self.update(row)
        except IntegrityError:
            raise DuplicateResourceException("department", name)
        return _to_result(updated)

    async def delete_department(self, department_id: str) -> bool:
        row = await super().get_by_id(department_id)
        if not row:
            return False
        await self.delete(row)
        return True
