"""Base repository: generic get/create/update/delete over an AsyncSession."""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.database import Base


def sqlstate_of(exc: DBAPIError) -> str | None:
    """Return the PostgreSQL SQLSTATE of a driver error, if the driver exposes it."""
    orig = getattr(exc, "orig", None)
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with get_by_id, create, update and delete.

    Writes run inside a SAVEPOINT so a failed statement (e.g. a unique
    violation the subclass maps to a domain exception) does not poison the
    surrounding request transaction.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def get_by_id(self, entity_id: str) -> ModelType | None:
        """Return a single record by primary key, or None."""
        model: Any = self.model
        result = await self.db.execute(select(self.model).where(model.id == entity_id))
        return result.scalar_one_or_none()

    async def create(self, obj: ModelType) -> ModelType:
        """Persist a new record and return it refreshed (server defaults loaded)."""
        async with self.db.begin_nested():
            self.db.add(obj)
            await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def update(self, obj: ModelType) -> ModelType:
        """Flush changes to an attached record and return it refreshed."""
        async with self.db.begin_nested():
            await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def delete(self, obj: ModelType) -> None:
        async with self.db.begin_nested():
            await self.db.delete(obj)
            await self.db.flush()
