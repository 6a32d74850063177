"""Shared infrastructure dependencies: blob store and notification channel.

Both are built once in the lifespan and kept on app.state. When the app runs
without its lifespan (e.g. some test clients), they are built on demand from
settings.
"""

from __future__ import annotations

from fastapi import Request

from app.application.interfaces.services import INotificationChannel
from app.application.interfaces.storage import IBlobStore
from app.core.config import get_settings
from app.infrastructure.external.storage import StorageFactory
from app.infrastructure.services import (
    UploadNotificationRenderer,
    create_notification_channel,
)


def get_blob_store(request: Request) -> IBlobStore:
    """Blob store selected by STORAGE_BACKEND."""
    store = getattr(request.app.state, "blob_store", None)
    if store is None:
        store = StorageFactory.create_storage_service(get_settings())
        request.app.state.blob_store = store
    return store


def get_notification_channel(request: Request) -> INotificationChannel:
    """Notification channel selected by NOTIFICATION_BACKEND (shares the app HTTP client)."""
    channel = getattr(request.app.state, "notification_channel", None)
    if channel is None:
        channel = create_notification_channel(
            get_settings(), getattr(request.app.state, "http_client", None)
        )
        request.app.state.notification_channel = channel
    return channel


def get_notification_renderer() -> UploadNotificationRenderer:
    return UploadNotificationRenderer()
