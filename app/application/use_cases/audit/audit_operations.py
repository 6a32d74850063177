"""Administrator operations on a single process: detail, add files, delete upload."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from app.application.dtos.overview import EMPTY_DISPLAY, ProcessDetail, UploadView
from app.application.use_cases.audit.overview import token_display
from app.application.use_cases.intake.upload_pipeline import validate_batch
from app.domain.exceptions import (
    IntakeException,
    PersistenceException,
    ResourceNotFoundException,
)
from app.shared.context import get_current_admin_id
from app.shared.telemetry.logging import get_logger
from app.shared.telemetry.tracing import traced

if TYPE_CHECKING:
    from app.application.dtos.upload import IncomingFile, UploadBatchResult
    from app.application.interfaces.repositories import (
        ICategoryRepository,
        IProcessRepository,
        ITokenRepository,
        ITransaction,
        IUploadRepository,
    )
    from app.application.interfaces.storage import IBlobStore
    from app.application.use_cases.intake.upload_pipeline import UploadPipeline

logger = get_logger(__name__)


class AuditOperations:
    """Process detail and upload maintenance for administrators."""

    def __init__(
        self,
        process_repo: IProcessRepository,
        upload_repo: IUploadRepository,
        token_repo: ITokenRepository,
        category_repo: ICategoryRepository,
        blob_store: IBlobStore,
        pipeline: UploadPipeline,
        *,
        max_file_size: int,
        transaction: ITransaction | None = None,
    ) -> None:
        self._process_repo = process_repo
        self._upload_repo = upload_repo
        self._token_repo = token_repo
        self._category_repo = category_repo
        self._blob_store = blob_store
        self._pipeline = pipeline
        self._max_file_size = max_file_size
        self._transaction = transaction

    async def get_process_detail(self, process_id: str) -> ProcessDetail:
        """Process with resolved token/category and its uploads (newest first, with URLs)."""
        process = await self._process_repo.get_by_id(process_id)
        if process is None:
            raise ResourceNotFoundException("process", process_id)
        token = await self._token_repo.get_by_id(process.token_id)
        category = (
            await self._category_repo.get_by_id(process.category_id)
            if process.category_id
            else None
        )
        uploads = await self._upload_repo.list_by_process(process.id)
        return ProcessDetail(
            process=process,
            token_display=token_display(token),
            category_name=category.name if category else EMPTY_DISPLAY,
            uploads=tuple(
                UploadView(upload=u, public_url=self._blob_store.public_url(u.file_path))
                for u in uploads
            ),
        )

    @traced("audit.add_files")
    async def add_files_to_process(
        self, process_id: str, files: Sequence[IncomingFile]
    ) -> UploadBatchResult:
        """Append files to an existing process. Any MIME type is accepted here.

        Raises:
            ResourceNotFoundException: unknown process.
            ValidationException: empty batch or oversized file.
        """
        process = await self._process_repo.get_by_id(process_id)
        if process is None:
            raise ResourceNotFoundException("process", process_id)
        validate_batch(files, max_file_size=self._max_file_size, images_only=False)
        result = await self._pipeline.add_files(process, files)
        logger.info(
            "Admin %s added %d file(s) to process #%d",
            get_current_admin_id() or "-",
            result.stored_count,
            process.process_number,
        )
        return result

    @traced("audit.delete_upload")
    async def delete_upload(self, upload_id: str) -> None:
        """Remove the blob, then the metadata row (committed before returning).

        The two steps are not compensated: when the row delete fails after the
        blob is gone, the row is left pointing at a missing blob and the
        failure is logged and raised.

        Raises:
            ResourceNotFoundException: unknown upload.
            StorageException: blob removal failed; the row is kept.
            PersistenceException: row delete failed after the blob was removed.
        """
        upload = await self._upload_repo.get_by_id(upload_id)
        if upload is None:
            raise ResourceNotFoundException("upload", upload_id)

        await self._blob_store.remove([upload.file_path])

        try:
            deleted = await self._upload_repo.delete_upload(upload.id)
            if deleted and self._transaction is not None:
                await self._transaction.commit()
        except IntakeException:
            logger.error(
                "Blob %s removed but upload row %s could not be deleted",
                upload.file_path,
                upload.id,
            )
            raise
        except Exception as e:
            logger.error(
                "Blob %s removed but upload row %s could not be deleted: %s",
                upload.file_path,
                upload.id,
                e,
            )
            raise PersistenceException("delete upload", type(e).__name__) from e
        if not deleted:
            raise ResourceNotFoundException("upload", upload_id)
        logger.info(
            "Admin %s deleted upload %s (%s)",
            get_current_admin_id() or "-",
            upload.id,
            upload.file_path,
        )
