"""Process repository. Creation goes through the start_process store procedure."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select, text
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.process import ProcessResult
from app.domain.exceptions import (
    InvalidTokenException,
    PersistenceException,
    ValidationException,
)
from app.infrastructure.persistence.models.process import Process
from app.infrastructure.persistence.repositories.base import BaseRepository, sqlstate_of
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import ensure_utc
from app.shared.utils.generators import generate_cuid

logger = get_logger(__name__)

# SQLSTATE codes raised by the start_process / add_upload procedures
SQLSTATE_INVALID_TOKEN = "IT401"
SQLSTATE_NOT_FOUND = "IT404"
SQLSTATE_NOTE_REQUIRED = "IT422"

_START_PROCESS_SQL = text(
    "SELECT id, process_number, token_id, category_id, note, created_at "
    "FROM start_process(:new_id, :token_value, :category, :note)"
)


def _to_result(p: Any) -> ProcessResult:
    """Map ORM Process (or a procedure result row) to ProcessResult."""
    return ProcessResult(
        id=p.id,
        process_number=p.process_number,
        token_id=p.token_id,
        category_id=p.category_id,
        note=p.note,
        created_at=ensure_utc(p.created_at),
    )


class ProcessRepository(BaseRepository[Process]):
    """Process repository. Rows are never inserted through the ORM."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Process)

    async def start_process(
        self, token_secret: str, category_id: str, note: str | None
    ) -> ProcessResult:
        """Call start_process(); token check, category check and insert are one statement.

        Raises:
            InvalidTokenException: IT401.
            ValidationException: IT404 (unknown category) or IT422 (note required).
            PersistenceException: any other database error.
        """
        try:
            async with self.db.begin_nested():
                result = await self.db.execute(
                    _START_PROCESS_SQL,
                    {
                        "new_id": generate_cuid(),
                        "token_value": token_secret,
                        "category": category_id,
                        "note": note,
                    },
                )
                row = result.one()
        except DBAPIError as e:
            code = sqlstate_of(e)
            if code == SQLSTATE_INVALID_TOKEN:
                raise InvalidTokenException() from e
            if code == SQLSTATE_NOT_FOUND:
                raise ValidationException("Unknown category", field="category_id") from e
            if code == SQLSTATE_NOTE_REQUIRED:
                raise ValidationException(
                    "A note is required for this category", field="note"
                ) from e
            logger.error("start_process failed (sqlstate=%s)", code, exc_info=True)
            raise PersistenceException("start process", code or type(e).__name__) from e
        return _to_result(row)

    async def get_by_id(self, process_id: str) -> ProcessResult | None:  # type: ignore[override]
        row = await super().get_by_id(process_id)
        return _to_result(row) if row else None

    async def list_processes(self, limit: int = 5000) -> list[ProcessResult]:
        result = await self.db.execute(
            select(Process)
            .order_by(Process.created_at.desc(), Process.process_number.desc())
            .limit(limit)
        )
        return [_to_result(p) for p in result.scalars().all()]
