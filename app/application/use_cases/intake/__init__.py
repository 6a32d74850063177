"""Intake use cases: process lifecycle, upload pipeline, notification, orchestration."""

from app.application.use_cases.intake.intake_service import IntakeOutcome, IntakeService
from app.application.use_cases.intake.notification_dispatcher import (
    NotificationDispatcher,
)
from app.application.use_cases.intake.process_lifecycle import ProcessLifecycleManager
from app.application.use_cases.intake.upload_pipeline import (
    UploadPipeline,
    build_storage_path,
    validate_batch,
)

__all__ = [
    "IntakeOutcome",
    "IntakeService",
    "NotificationDispatcher",
    "ProcessLifecycleManager",
    "UploadPipeline",
    "build_storage_path",
    "validate_batch",
]
