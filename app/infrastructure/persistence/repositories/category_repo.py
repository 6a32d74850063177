"""Category repository. Returns application DTOs."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.category import CategoryResult
from app.domain.exceptions import DuplicateResourceException
from app.infrastructure.persistence.models.category import Category
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.utils.datetime import ensure_utc


def _to_result(c: Category) -> CategoryResult:
    """Map ORM Category to CategoryResult."""
    return CategoryResult(
        id=c.id,
        name=c.name,
        notes_required=c.notes_required,
        created_at=ensure_utc(c.created_at),
    )


class CategoryRepository(BaseRepository[Category]):
    """Category repository. Deleting a category leaves its processes with a NULL category."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Category)

    async def get_by_id(self, category_id: str) -> CategoryResult | None:  # type: ignore[override]
        row = await super().get_by_id(category_id)
        return _to_result(row) if row else None

    async def get_by_name(self, name: str) -> CategoryResult | None:
        result = await self.db.execute(select(Category).where(Category.name == name))
        row = result.scalar_one_or_none()
        return _to_result(row) if row else None

    async def list_categories(self, limit: int = 1000) -> list[CategoryResult]:
        result = await self.db.execute(
            select(Category).order_by(Category.name.asc()).limit(limit)
        )
        return [_to_result(c) for c in result.scalars().all()]

    async def create_category(
        self, name: str, *, notes_required: bool = False
    ) -> CategoryResult:
        """Create category; raise DuplicateResourceException on unique name violation."""
        try:
            created = await self.create(Category(name=name, notes_required=notes_required))
        except IntegrityError:
            raise DuplicateResourceException("category", name)
        return _to_result(created)

    async def update_category(
        self,
        category_id: str,
        *,
        name: str | None = None,
        notes_required: bool | None = None,
    ) -> CategoryResult | None:
        row = await super().get_by_id(category_id)
        if not row:
            return None
        if name is not None:
            row.name = name
        if notes_required is not None:
            row.notes_required = notes_required
        try:
            updated = await self.update(row)
        except IntegrityError:
            raise DuplicateResourceException("category", name or "")
        return _to_result(updated)

    async def delete_category(self, category_id: str) -> bool:
        row = await super().get_by_id(category_id)
        if not row:
            return False
        await self.delete(row)
        return True
