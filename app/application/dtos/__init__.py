"""Application DTOs (no ORM dependency)."""

from app.application.dtos.admin_user import AdminUserResult
from app.application.dtos.category import CategoryResult
from app.application.dtos.department import DepartmentResult
from app.application.dtos.overview import (
    AuditIndexes,
    AuditRow,
    AuditSnapshot,
    OrphanSweepReport,
    OverviewFilters,
    OverviewSort,
    ProcessDetail,
    UploadView,
)
from app.application.dtos.process import ProcessResult
from app.application.dtos.token import TokenMembership, TokenResult
from app.application.dtos.upload import (
    BlobEntry,
    FileFailure,
    IncomingFile,
    StoredFile,
    UploadBatchResult,
    UploadResult,
)

__all__ = [
    "AdminUserResult",
    "AuditIndexes",
    "AuditRow",
    "AuditSnapshot",
    "BlobEntry",
    "CategoryResult",
    "DepartmentResult",
    "FileFailure",
    "IncomingFile",
    "OrphanSweepReport",
    "OverviewFilters",
    "OverviewSort",
    "ProcessDetail",
    "ProcessResult",
    "StoredFile",
    "TokenMembership",
    "TokenResult",
    "UploadBatchResult",
    "UploadResult",
    "UploadView",
]
