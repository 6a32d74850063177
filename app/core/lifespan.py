"""Application lifespan: startup and shutdown.

Single place for startup/shutdown wiring; no business logic here. Builds
the shared HTTP client, blob store and notification channel once per
process and disposes the DB engine on exit.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI

from app.core.config import get_settings
from app.infrastructure.external.storage import StorageFactory
from app.infrastructure.persistence.database import dispose_engine
from app.infrastructure.services import create_notification_channel
from app.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: logging, shared HTTP client, blob store, notification channel.
    Shutdown: HTTP client close, SQL engine dispose.
    """
    settings = get_settings()
    setup_logging()

    # ---- Startup ----
    app.state.http_client = httpx.AsyncClient(
        timeout=settings.notification_timeout_seconds
    )
    app.state.blob_store = StorageFactory.create_storage_service(settings)
    app.state.notification_channel = create_notification_channel(
        settings, app.state.http_client
    )
    logger.info(
        "Started %s %s (storage=%s, notification=%s)",
        settings.app_name,
        settings.app_version,
        settings.storage_backend,
        settings.notification_backend,
    )

    yield

    # ---- Shutdown ----
    if getattr(app.state, "http_client", None) is not None:
        await app.state.http_client.aclose()
        app.state.http_client = None
        logger.info("HTTP client closed")

    await dispose_engine()
    logger.info("Database engine disposed")
