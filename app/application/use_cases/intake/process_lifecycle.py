"""Process lifecycle: open a numbered process for a token, category and note."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.domain.exceptions import PersistenceException, ValidationException
from app.shared.telemetry.logging import get_logger
from app.shared.telemetry.tracing import add_span_attributes, traced

if TYPE_CHECKING:
    from app.application.dtos.process import ProcessResult
    from app.application.interfaces.repositories import IProcessRepository, ITransaction

logger = get_logger(__name__)

MAX_NOTE_LENGTH = 5000


def normalize_note(note: str | None) -> str | None:
    """Trim the note; empty or whitespace-only notes are stored as NULL."""
    text = (note or "").strip()
    return text or None


class ProcessLifecycleManager:
    """Creates processes. The only writer of the process table.

    Token and category checks and the insert happen in one store call
    (start_process procedure), so a rejected request leaves no row behind and
    concurrent callers never share a process number. With a transaction the
    new process is committed before start_process returns.
    """

    def __init__(
        self,
        process_repo: IProcessRepository,
        *,
        transaction: ITransaction | None = None,
    ) -> None:
        self._process_repo = process_repo
        self._transaction = transaction

    @traced("intake.start_process")
    async def start_process(
        self,
        token: str,
        category_id: str,
        note: str | None = None,
    ) -> ProcessResult:
        """Open a process and return it with its store-assigned number.

        Raises:
            ValidationException: token or category missing, unknown category,
                note too long or missing when the category requires one.
            InvalidTokenException: token unknown or inactive.
            PersistenceException: any other store failure.
        """
        secret = (token or "").strip()
        if not secret:
            raise ValidationException("Token is required", field="token")
        category = (category_id or "").strip()
        if not category:
            raise ValidationException("Category is required", field="category_id")
        clean_note = normalize_note(note)
        if clean_note is not None and len(clean_note) > MAX_NOTE_LENGTH:
            raise ValidationException(
                f"Note must be at most {MAX_NOTE_LENGTH} characters", field="note"
            )

        process = await self._process_repo.start_process(secret, category, clean_note)
        if self._transaction is not None:
            try:
                await self._transaction.commit()
            except Exception as e:
                logger.error(
                    "Commit of process #%d failed", process.process_number, exc_info=True
                )
                raise PersistenceException("start process", type(e).__name__) from e
        add_span_attributes(process_number=process.process_number)
        logger.info(
            "Started process #%d (id=%s, category=%s)",
            process.process_number,
            process.id,
            category,
        )
        return process
