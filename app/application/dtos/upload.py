"""DTOs for the upload pipeline (no dependency on ORM)."""

from dataclasses import dataclass, replace
from datetime import datetime

from app.domain.enums import UploadStep


@dataclass(frozen=True)
class IncomingFile:
    """One file of an upload batch as received from the caller."""

    data: bytes
    name: str
    mime_type: str | None
    size: int


@dataclass(frozen=True)
class UploadResult:
    """Upload metadata read-model (result of add_upload, get_by_id, list)."""

    id: str
    process_id: str
    file_path: str
    mime_type: str | None
    size: int | None
    created_at: datetime


@dataclass(frozen=True)
class StoredFile:
    """A file that was stored and recorded; index is its 0-based batch position."""

    index: int
    name: str
    upload: UploadResult


@dataclass(frozen=True)
class FileFailure:
    """The file that stopped the batch and the step that failed for it."""

    index: int
    name: str
    step: UploadStep
    message: str


@dataclass(frozen=True)
class UploadBatchResult:
    """Accumulator and outcome of one upload batch.

    At most one file fails; every file after it is listed in skipped and was
    never attempted.
    """

    total: int
    stored: tuple[StoredFile, ...] = ()
    failed: FileFailure | None = None
    skipped: tuple[str, ...] = ()

    @property
    def succeeded(self) -> bool:
        return self.failed is None and not self.skipped

    @property
    def stored_count(self) -> int:
        return len(self.stored)

    @property
    def message(self) -> str:
        """Short user-facing summary, e.g. 'Upload 3 of 5 failed (foto 3.jpg): storage error'."""
        if self.failed is None:
            return f"{self.stored_count} of {self.total} files uploaded"
        return (
            f"Upload {self.failed.index + 1} of {self.total} failed "
            f"({self.failed.name}): {self.failed.step.value} error"
        )

    def with_stored(self, item: StoredFile) -> "UploadBatchResult":
        return replace(self, stored=(*self.stored, item))

    def with_failure(self, failure: FileFailure) -> "UploadBatchResult":
        return replace(self, failed=failure)

    def with_skipped(self, name: str) -> "UploadBatchResult":
        return replace(self, skipped=(*self.skipped, name))


@dataclass(frozen=True)
class BlobEntry:
    """A blob as listed by the blob store (used by the orphan sweep)."""

    path: str
    last_modified: datetime
