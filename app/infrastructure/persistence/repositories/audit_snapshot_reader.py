"""Overview snapshot reads: one short-lived session per read so the six can run concurrently."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TypeVar

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.application.dtos.category import CategoryResult
from app.application.dtos.department import DepartmentResult
from app.application.dtos.process import ProcessResult
from app.application.dtos.token import TokenMembership, TokenResult
from app.application.dtos.upload import UploadResult
from app.infrastructure.persistence.repositories.category_repo import CategoryRepository
from app.infrastructure.persistence.repositories.department_repo import (
    DepartmentRepository,
)
from app.infrastructure.persistence.repositories.process_repo import ProcessRepository
from app.infrastructure.persistence.repositories.token_repo import TokenRepository
from app.infrastructure.persistence.repositories.upload_repo import UploadRepository
from app.shared.telemetry.logging import get_logger

T = TypeVar("T")

logger = get_logger(__name__)

# Memberships and uploads outnumber their parent rows
CHILD_LIMIT_FACTOR = 10


class SqlAuditSnapshotReader:
    """IAuditSnapshotReader over a session factory. Every read is bounded.

    A read that returns exactly its bound is logged as truncated: the overview
    built from it may be missing rows or show stale upload counts.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession], limit: int) -> None:
        self._session_factory = session_factory
        self._limit = limit

    async def _read(
        self,
        name: str,
        limit: int,
        fn: Callable[[AsyncSession, int], Awaitable[list[T]]],
    ) -> list[T]:
        async with self._session_factory() as session:
            rows = await fn(session, limit)
        if len(rows) >= limit:
            logger.warning(
                "Overview read '%s' hit its limit of %d rows; older rows are missing",
                name,
                limit,
            )
        return rows

    async def read_departments(self) -> list[DepartmentResult]:
        return await self._read(
            "departments",
            self._limit,
            lambda s, n: DepartmentRepository(s).list_departments(n),
        )

    async def read_tokens(self) -> list[TokenResult]:
        return await self._read(
            "tokens", self._limit, lambda s, n: TokenRepository(s).list_tokens(n)
        )

    async def read_memberships(self) -> list[TokenMembership]:
        return await self._read(
            "memberships",
            self._limit * CHILD_LIMIT_FACTOR,
            lambda s, n: TokenRepository(s).list_memberships(n),
        )

    async def read_categories(self) -> list[CategoryResult]:
        return await self._read(
            "categories",
            self._limit,
            lambda s, n: CategoryRepository(s).list_categories(n),
        )

    async def read_processes(self) -> list[ProcessResult]:
        return await self._read(
            "processes",
            self._limit,
            lambda s, n: ProcessRepository(s).list_processes(n),
        )

    async def read_uploads(self) -> list[UploadResult]:
        return await self._read(
            "uploads",
            self._limit * CHILD_LIMIT_FACTOR,
            lambda s, n: UploadRepository(s).list_uploads(n),
        )
