"""Upload repository. Inserts go through the add_upload store procedure."""

from __future__ import annotations

from typing import Any

from sqlalchemy import delete, select, text
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.upload import UploadResult
from app.domain.exceptions import PersistenceException, ResourceNotFoundException
from app.infrastructure.persistence.models.upload import Upload
from app.infrastructure.persistence.repositories.base import BaseRepository, sqlstate_of
from app.infrastructure.persistence.repositories.process_repo import SQLSTATE_NOT_FOUND
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import ensure_utc
from app.shared.utils.generators import generate_cuid

logger = get_logger(__name__)

_ADD_UPLOAD_SQL = text(
    "SELECT id, process_id, file_path, mime_type, size, created_at "
    "FROM add_upload(:new_id, :process, :file_path, :mime, :size)"
)


def _to_result(u: Any) -> UploadResult:
    """Map ORM Upload (or a procedure result row) to UploadResult."""
    return UploadResult(
        id=u.id,
        process_id=u.process_id,
        file_path=u.file_path,
        mime_type=u.mime_type,
        size=u.size,
        created_at=ensure_utc(u.created_at),
    )


class UploadRepository(BaseRepository[Upload]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Upload)

    async def add_upload(
        self,
        process_id: str,
        file_path: str,
        mime_type: str | None,
        size: int | None,
    ) -> UploadResult:
        """Call add_upload() in a savepoint so earlier rows of the batch survive a failure.

        Raises:
            ResourceNotFoundException: the process does not exist (IT404).
            PersistenceException: any other database error.
        """
        try:
            async with self.db.begin_nested():
                result = await self.db.execute(
                    _ADD_UPLOAD_SQL,
                    {
                        "new_id": generate_cuid(),
                        "process": process_id,
                        "file_path": file_path,
                        "mime": mime_type,
                        "size": size,
                    },
                )
                row = result.one()
        except DBAPIError as e:
            code = sqlstate_of(e)
            if code == SQLSTATE_NOT_FOUND:
                raise ResourceNotFoundException("process", process_id) from e
            raise PersistenceException("record upload", code or type(e).__name__) from e
        return _to_result(row)

    async def get_by_id(self, upload_id: str) -> UploadResult | None:  # type: ignore[override]
        row = await super().get_by_id(upload_id)
        return _to_result(row) if row else None

    async def list_by_process(self, process_id: str) -> list[UploadResult]:
        result = await self.db.execute(
            select(Upload)
            .where(Upload.process_id == process_id)
            .order_by(Upload.created_at.desc(), Upload.file_path.desc())
        )
        return [_to_result(u) for u in result.scalars().all()]

    async def list_uploads(self, limit: int = 50000) -> list[UploadResult]:
        result = await self.db.execute(
            select(Upload).order_by(Upload.created_at.desc()).limit(limit)
        )
        return [_to_result(u) for u in result.scalars().all()]

    async def list_file_paths(self) -> set[str]:
        result = await self.db.execute(select(Upload.file_path))
        return set(result.scalars().all())

    async def delete_upload(self, upload_id: str) -> bool:
        try:
            async with self.db.begin_nested():
                result = await self.db.execute(delete(Upload).where(Upload.id == upload_id))
        except DBAPIError as e:
            raise PersistenceException("delete upload", sqlstate_of(e) or type(e).__name__) from e
        return bool(result.rowcount)
