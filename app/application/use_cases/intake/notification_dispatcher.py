"""Notification dispatcher: best-effort e-mail to a token's address after a batch."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING

from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import format_local, utc_now

if TYPE_CHECKING:
    from app.application.interfaces.repositories import ITokenRepository
    from app.application.interfaces.services import (
        INotificationChannel,
        INotificationRenderer,
    )

logger = get_logger(__name__)


class NotificationDispatcher:
    """Sends the upload-completed e-mail. Never raises.

    A token without an address is a silent no-op. Lookup, rendering and send
    failures are logged and swallowed so they cannot change the batch outcome
    already reported to the caller.
    """

    def __init__(
        self,
        token_repo: ITokenRepository,
        channel: INotificationChannel,
        renderer: INotificationRenderer,
        *,
        timezone: str = "Europe/Berlin",
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._token_repo = token_repo
        self._channel = channel
        self._renderer = renderer
        self._timezone = timezone
        self._clock = clock

    async def notify(
        self,
        token_id: str,
        process_number: int,
        category_name: str,
        file_count: int,
        note: str | None = None,
    ) -> None:
        try:
            token = await self._token_repo.get_by_id(token_id)
            address = token.email if token else None
            if not address:
                logger.info(
                    "No notification address for process #%d; skipping", process_number
                )
                return
            subject, html = self._renderer.render(
                process_number=process_number,
                category_name=category_name,
                file_count=file_count,
                timestamp=format_local(self._clock(), self._timezone),
                note=note,
            )
            await self._channel.send(address, subject, html)
        except Exception:
            logger.warning(
                "Notification for process #%d failed; upload outcome unchanged",
                process_number,
                exc_info=True,
            )
            return
        logger.info("Notification sent for process #%d", process_number)
