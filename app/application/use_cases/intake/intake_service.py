"""Public intake: token -> process -> files -> optional notification."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.application.use_cases.intake.process_lifecycle import normalize_note
from app.application.use_cases.intake.upload_pipeline import validate_batch
from app.domain.exceptions import ValidationException
from app.shared.telemetry.logging import get_logger
from app.shared.telemetry.tracing import traced

if TYPE_CHECKING:
    from app.application.dtos.category import CategoryResult
    from app.application.dtos.process import ProcessResult
    from app.application.dtos.upload import IncomingFile, UploadBatchResult
    from app.application.interfaces.repositories import ICategoryRepository
    from app.application.services.token_registry import TokenRegistry
    from app.application.use_cases.intake.notification_dispatcher import (
        NotificationDispatcher,
    )
    from app.application.use_cases.intake.process_lifecycle import (
        ProcessLifecycleManager,
    )
    from app.application.use_cases.intake.upload_pipeline import UploadPipeline

logger = get_logger(__name__)


@dataclass(frozen=True)
class IntakeOutcome:
    """Result of one intake submission. The process exists even when the batch failed."""

    process: ProcessResult
    category_name: str
    batch: UploadBatchResult
    notification_requested: bool


class IntakeService:
    """Runs one intake submission.

    Everything that can be rejected (token, category, note, files) is checked
    before the process is created. Once it exists, file errors are reported in
    the batch result instead of being raised. The lifecycle and the pipeline
    commit as they go, so the notification only ever describes committed rows.
    """

    def __init__(
        self,
        registry: TokenRegistry,
        lifecycle: ProcessLifecycleManager,
        pipeline: UploadPipeline,
        dispatcher: NotificationDispatcher,
        category_repo: ICategoryRepository,
        *,
        max_file_size: int,
    ) -> None:
        self._registry = registry
        self._lifecycle = lifecycle
        self._pipeline = pipeline
        self._dispatcher = dispatcher
        self._category_repo = category_repo
        self._max_file_size = max_file_size

    async def list_categories(self) -> list[CategoryResult]:
        """Categories offered on the intake form (ordered by name)."""
        return await self._category_repo.list_categories()

    async def _require_category(self, category_id: str, note: str | None) -> CategoryResult:
        category_key = (category_id or "").strip()
        if not category_key:
            raise ValidationException("Category is required", field="category_id")
        category = await self._category_repo.get_by_id(category_key)
        if category is None:
            raise ValidationException("Unknown category", field="category_id")
        if category.notes_required and normalize_note(note) is None:
            raise ValidationException(
                f"A note is required for category '{category.name}'", field="note"
            )
        return category

    @traced("intake.submit")
    async def submit(
        self,
        *,
        token: str,
        category_id: str,
        note: str | None,
        files: Sequence[IncomingFile],
        notify: bool = False,
    ) -> IntakeOutcome:
        """Validate, open a process and store the files.

        Raises:
            ValidationException: bad field or file (nothing is written).
            InvalidTokenException: token unknown or inactive (nothing is written).
            PersistenceException: the process could not be created.
        """
        token_result = await self._registry.resolve(token)
        category = await self._require_category(category_id, note)
        validate_batch(files, max_file_size=self._max_file_size, images_only=True)

        process = await self._lifecycle.start_process(token_result.token, category.id, note)
        batch = await self._pipeline.add_files(process, files)

        if notify and batch.stored_count > 0:
            await self._dispatcher.notify(
                token_result.id,
                process.process_number,
                category.name,
                batch.stored_count,
                process.note,
            )
        return IntakeOutcome(
            process=process,
            category_name=category.name,
            batch=batch,
            notification_requested=notify,
        )
