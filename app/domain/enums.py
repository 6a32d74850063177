"""Domain enumerations for the intake application.

Enums represent fixed sets of domain values (upload failure steps, overview
sort keys).
"""

from enum import Enum


class UploadStep(str, Enum):
    """Step of the per-file pipeline that failed.

    STORAGE: the blob write was rejected; nothing was persisted for the file.
    METADATA: the blob exists but its upload row was not recorded (orphan).
    """

    STORAGE = "storage"
    METADATA = "metadata"


class OverviewSortField(str, Enum):
    """Columns the audit overview can be ordered by."""

    CREATED_AT = "created_at"
    LAST_EDIT = "last_edit"
    PROCESS_NUMBER = "process_number"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid sort keys as strings (e.g. for query validation)."""
        return [field.value for field in cls]
