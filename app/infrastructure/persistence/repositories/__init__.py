"""Persistence repositories: one per aggregate, returning application DTOs."""

from app.infrastructure.persistence.repositories.admin_user_repo import (
    AdminUserRepository,
)
from app.infrastructure.persistence.repositories.audit_snapshot_reader import (
    SqlAuditSnapshotReader,
)
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.persistence.repositories.category_repo import CategoryRepository
from app.infrastructure.persistence.repositories.department_repo import (
    DepartmentRepository,
)
from app.infrastructure.persistence.repositories.process_repo import ProcessRepository
from app.infrastructure.persistence.repositories.token_repo import TokenRepository
from app.infrastructure.persistence.repositories.upload_repo import UploadRepository

__all__ = [
    "AdminUserRepository",
    "BaseRepository",
    "CategoryRepository",
    "DepartmentRepository",
    "ProcessRepository",
    "SqlAuditSnapshotReader",
    "TokenRepository",
    "UploadRepository",
]
