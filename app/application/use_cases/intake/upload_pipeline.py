"""Upload pipeline: store a batch of files for one process, strictly one at a time.

The batch is a fold over the file list. The accumulator (UploadBatchResult)
stops at the first failure: the failing file is recorded with the step that
failed and every later file is listed as skipped without being attempted.
With a transaction, each recorded upload is committed before the next file
starts, so a later failure never takes earlier files with it.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime
from typing import TYPE_CHECKING

from app.application.dtos.upload import (
    FileFailure,
    IncomingFile,
    StoredFile,
    UploadBatchResult,
)
from app.domain.enums import UploadStep
from app.domain.exceptions import IntakeException, ValidationException
from app.shared.telemetry.logging import get_logger
from app.shared.telemetry.tracing import add_span_attributes, add_span_event, traced
from app.shared.utils.datetime import to_timestamp_ms, utc_now
from app.shared.utils.sanitization import sanitize_storage_name

if TYPE_CHECKING:
    from app.application.dtos.process import ProcessResult
    from app.application.interfaces.repositories import ITransaction, IUploadRepository
    from app.application.interfaces.storage import IBlobStore

logger = get_logger(__name__)

DEFAULT_CONTENT_TYPE = "image/*"
IMAGE_MIME_PREFIX = "image/"


def build_storage_path(
    process_number: int, index: int, name: str, timestamp_ms: int
) -> str:
    """Return '{process_number}/{timestamp_ms}_{index}_{sanitized name}'."""
    return f"{process_number}/{timestamp_ms}_{index}_{sanitize_storage_name(name)}"


def content_type_for(item: IncomingFile) -> str:
    return (item.mime_type or "").strip() or DEFAULT_CONTENT_TYPE


def validate_batch(
    files: Sequence[IncomingFile],
    *,
    max_file_size: int,
    images_only: bool,
) -> None:
    """Reject a batch before anything is written.

    Raises:
        ValidationException: empty batch, oversized file, or (images_only)
            a file whose MIME type is not image/*.
    """
    if not files:
        raise ValidationException("At least one file is required", field="files")
    for item in files:
        if item.size > max_file_size:
            raise ValidationException(
                f"File '{item.name}' exceeds the maximum size of {max_file_size} bytes",
                field="files",
            )
        if images_only and not (item.mime_type or "").startswith(IMAGE_MIME_PREFIX):
            raise ValidationException(
                f"File '{item.name}' is not an image", field="files"
            )


def _failure_message(exc: Exception) -> str:
    if isinstance(exc, IntakeException):
        return exc.message
    return "Unexpected error"


class UploadPipeline:
    """Stores blobs and records their metadata. The only writer of the upload table."""

    def __init__(
        self,
        blob_store: IBlobStore,
        upload_repo: IUploadRepository,
        clock: Callable[[], datetime] = utc_now,
        *,
        transaction: ITransaction | None = None,
    ) -> None:
        self._blob_store = blob_store
        self._upload_repo = upload_repo
        self._clock = clock
        self._transaction = transaction

    @traced("intake.add_files")
    async def add_files(
        self, process: ProcessResult, files: Sequence[IncomingFile]
    ) -> UploadBatchResult:
        """Store files in order and return the batch outcome. Never raises for a file error."""
        result = UploadBatchResult(total=len(files))
        for index, item in enumerate(files):
            result = await self._step(result, process, index, item)
        add_span_attributes(
            stored=result.stored_count, skipped=len(result.skipped)
        )
        if result.failed is None:
            logger.info(
                "Stored %d file(s) for process #%d",
                result.stored_count,
                process.process_number,
            )
        else:
            logger.warning(
                "Process #%d: %s (%d stored, %d skipped)",
                process.process_number,
                result.message,
                result.stored_count,
                len(result.skipped),
            )
        return result

    async def _step(
        self,
        acc: UploadBatchResult,
        process: ProcessResult,
        index: int,
        item: IncomingFile,
    ) -> UploadBatchResult:
        if acc.failed is not None:
            return acc.with_skipped(item.name)

        path = build_storage_path(
            process.process_number, index, item.name, to_timestamp_ms(self._clock())
        )
        content_type = content_type_for(item)

        try:
            await self._blob_store.put(path, item.data, content_type)
        except Exception as exc:
            logger.warning(
                "Blob write failed for file %d of process #%d: %s",
                index,
                process.process_number,
                exc,
            )
            return acc.with_failure(
                FileFailure(index, item.name, UploadStep.STORAGE, _failure_message(exc))
            )

        try:
            upload = await self._upload_repo.add_upload(
                process.id, path, content_type, item.size
            )
            if self._transaction is not None:
                await self._transaction.commit()
        except Exception as exc:
            logger.error(
                "Metadata write failed for file %d of process #%d; orphaned blob left at %s: %s",
                index,
                process.process_number,
                path,
                exc,
            )
            return acc.with_failure(
                FileFailure(index, item.name, UploadStep.METADATA, _failure_message(exc))
            )

        add_span_event("upload.stored", {"index": index, "size": item.size})
        return acc.with_stored(StoredFile(index, item.name, upload))
