"""Public intake dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from app.api.v1.dependencies.db import StepSession
from app.api.v1.dependencies.infrastructure import (
    get_blob_store,
    get_notification_channel,
    get_notification_renderer,
)
from app.application.interfaces.services import (
    INotificationChannel,
    INotificationRenderer,
)
from app.application.interfaces.storage import IBlobStore
from app.application.services.token_registry import TokenRegistry
from app.application.use_cases.intake import (
    IntakeService,
    NotificationDispatcher,
    ProcessLifecycleManager,
    UploadPipeline,
)
from app.core.config import get_settings
from app.infrastructure.persistence.repositories import (
    CategoryRepository,
    ProcessRepository,
    TokenRepository,
    UploadRepository,
)


async def get_intake_service(
    db: StepSession,
    blob_store: Annotated[IBlobStore, Depends(get_blob_store)],
    channel: Annotated[INotificationChannel, Depends(get_notification_channel)],
    renderer: Annotated[INotificationRenderer, Depends(get_notification_renderer)],
) -> IntakeService:
    """Intake service for one request; the process and each upload are committed as they succeed."""
    settings = get_settings()
    token_repo = TokenRepository(db)
    return IntakeService(
        registry=TokenRegistry(token_repo),
        lifecycle=ProcessLifecycleManager(ProcessRepository(db), transaction=db),
        pipeline=UploadPipeline(blob_store, UploadRepository(db), transaction=db),
        dispatcher=NotificationDispatcher(
            token_repo,
            channel,
            renderer,
            timezone=settings.notification_timezone,
        ),
        category_repo=CategoryRepository(db),
        max_file_size=settings.max_upload_size,
    )
