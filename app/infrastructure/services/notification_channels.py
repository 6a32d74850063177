"""Notification channels: log-only and HTTP e-mail API (Resend-compatible)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

from app.application.interfaces.services import INotificationChannel
from app.domain.exceptions import NotificationException
from app.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from app.core.config import Settings

logger = get_logger(__name__)


class LogOnlyNotificationChannel:
    """INotificationChannel implementation that logs instead of sending e-mail.

    Default when no e-mail API is configured.
    """

    async def send(self, address: str, subject: str, html: str) -> None:
        """Log the notification; nothing is delivered."""
        logger.info("Notification (log only): subject=%r", (subject or "")[:80])
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Notification recipient: %s", address)
            logger.debug("Notification body (first 500 chars): %s", (html or "")[:500])


class HttpEmailNotificationChannel:
    """Sends one e-mail per call through a JSON e-mail API (POST from/to/subject/html)."""

    def __init__(
        self,
        *,
        api_url: str,
        api_key: str,
        sender: str,
        http_client: httpx.AsyncClient,
        timeout: float = 10.0,
    ) -> None:
        self._api_url = api_url
        self._api_key = api_key
        self._sender = sender
        self._http = http_client
        self._timeout = timeout

    async def send(self, address: str, subject: str, html: str) -> None:
        """POST the message to the API.

        Raises:
            NotificationException: transport error or non-2xx response.
        """
        payload = {
            "from": self._sender,
            "to": [address],
            "subject": subject,
            "html": html,
        }
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        try:
            resp = await self._http.post(
                self._api_url, json=payload, headers=headers, timeout=self._timeout
            )
        except httpx.HTTPError as e:
            raise NotificationException(f"transport error: {type(e).__name__}") from e
        if resp.status_code >= 300:
            raise NotificationException(f"e-mail API returned {resp.status_code}")
        logger.info("Notification e-mail accepted by API (status=%d)", resp.status_code)


def create_notification_channel(
    settings: Settings,
    http_client: httpx.AsyncClient | None = None,
) -> INotificationChannel:
    """Create the channel selected by NOTIFICATION_BACKEND.

    Raises:
        ValueError: 'http' backend without a shared HTTP client.
    """
    backend = settings.notification_backend.lower()
    if backend == "http":
        if http_client is None:
            raise ValueError("http notification backend requires a shared httpx.AsyncClient")
        api_key = settings.notification_api_key
        return HttpEmailNotificationChannel(
            api_url=settings.notification_api_url,
            api_key=api_key.get_secret_value() if api_key else "",
            sender=settings.notification_sender,
            http_client=http_client,
            timeout=settings.notification_timeout_seconds,
        )
    return LogOnlyNotificationChannel()
