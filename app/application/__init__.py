"""Application layer: interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (repositories, blob store, notification channel).
"""

from app.application.interfaces import (
    IAdminUserRepository,
    IAuditSnapshotReader,
    IBlobStore,
    ICategoryRepository,
    IDepartmentRepository,
    INotificationChannel,
    IPasswordHasher,
    IProcessRepository,
    ITokenRepository,
    IUploadRepository,
)

__all__ = [
    "IAdminUserRepository",
    "IAuditSnapshotReader",
    "IBlobStore",
    "ICategoryRepository",
    "IDepartmentRepository",
    "INotificationChannel",
    "IPasswordHasher",
    "IProcessRepository",
    "ITokenRepository",
    "IUploadRepository",
]
