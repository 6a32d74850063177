"""Infrastructure exceptions for blob storage operations.

Storage errors extend IntakeException so presentation can map them
to HTTP responses consistently.
"""

from app.domain.exceptions import IntakeException


class StorageException(IntakeException):
    """Base exception for storage operations."""


class StorageUploadError(StorageException):
    """Blob write failed."""

    def __init__(self, file_path: str, reason: str) -> None:
        super().__init__(
            f"Failed to store file: {file_path}",
            "STORAGE_UPLOAD_ERROR",
            {"file_path": file_path, "reason": reason},
        )


class StorageDeleteError(StorageException):
    """Blob removal failed."""

    def __init__(self, file_path: str, reason: str) -> None:
        super().__init__(
            f"Failed to delete file: {file_path}",
            "STORAGE_DELETE_ERROR",
            {"file_path": file_path, "reason": reason},
        )


class StorageAlreadyExistsError(StorageException):
    """A blob already exists at the target path (writes never upsert)."""

    def __init__(self, file_path: str) -> None:
        super().__init__(
            f"File already exists: {file_path}",
            "STORAGE_EXISTS_ERROR",
            {"file_path": file_path},
        )


class StorageListError(StorageException):
    """Listing blobs failed (orphan sweep)."""

    def __init__(self, prefix: str, reason: str) -> None:
        super().__init__(
            f"Failed to list files under: {prefix or '/'}",
            "STORAGE_LIST_ERROR",
            {"prefix": prefix, "reason": reason},
        )


class StoragePermissionError(StorageException):
    """Path escapes the storage root."""

    def __init__(self, file_path: str, operation: str) -> None:
        super().__init__(
            f"Permission denied for {operation} on {file_path}",
            "STORAGE_PERMISSION_ERROR",
            {"file_path": file_path, "operation": operation},
        )
