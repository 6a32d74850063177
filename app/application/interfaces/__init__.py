"""Application interfaces (ports): repository, storage and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure.
"""

from app.application.interfaces.repositories import (
    IAdminUserRepository,
    IAuditSnapshotReader,
    ICategoryRepository,
    IDepartmentRepository,
    IProcessRepository,
    ITokenRepository,
    ITransaction,
    IUploadRepository,
)
from app.application.interfaces.services import (
    INotificationChannel,
    INotificationRenderer,
    IPasswordHasher,
)
from app.application.interfaces.storage import IBlobStore

__all__ = [
    "IAdminUserRepository",
    "IAuditSnapshotReader",
    "IBlobStore",
    "ICategoryRepository",
    "IDepartmentRepository",
    "INotificationChannel",
    "INotificationRenderer",
    "IPasswordHasher",
    "IProcessRepository",
    "ITokenRepository",
    "ITransaction",
    "IUploadRepository",
]
