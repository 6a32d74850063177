"""Application use cases: one entry point per workflow."""

from app.application.use_cases.audit import (
    AuditOperations,
    AuditViewBuilder,
    OrphanSweeper,
)
from app.application.use_cases.intake import (
    IntakeService,
    NotificationDispatcher,
    ProcessLifecycleManager,
    UploadPipeline,
)

__all__ = [
    "AuditOperations",
    "AuditViewBuilder",
    "IntakeService",
    "NotificationDispatcher",
    "OrphanSweeper",
    "ProcessLifecycleManager",
    "UploadPipeline",
]
