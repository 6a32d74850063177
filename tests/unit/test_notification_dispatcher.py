"""NotificationDispatcher: best effort, never raises, no-op without address."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

from app.application.use_cases.intake import NotificationDispatcher
from app.domain.exceptions import NotificationException
from tests.factories import make_token

FIXED = datetime(2025, 1, 15, 11, 0, 0, tzinfo=timezone.utc)


def _dispatcher(token_repo, channel, renderer=None) -> NotificationDispatcher:
    if renderer is None:
        renderer = MagicMock()
        renderer.render = MagicMock(return_value=("subject", "<p>body</p>"))
    return NotificationDispatcher(
        token_repo, channel, renderer, timezone="Europe/Berlin", clock=lambda: FIXED
    )


async def test_sends_to_token_address_with_local_timestamp() -> None:
    token_repo = AsyncMock()
    token_repo.get_by_id = AsyncMock(return_value=make_token(email="lager@example.com"))
    channel = AsyncMock()
    renderer = MagicMock()
    renderer.render = MagicMock(return_value=("Upload abgeschlossen - Vorgang #42", "<p/>"))

    await _dispatcher(token_repo, channel, renderer).notify("tk1", 42, "Wareneingang", 2, "hi")

    renderer.render.assert_called_once_with(
        process_number=42,
        category_name="Wareneingang",
        file_count=2,
        timestamp="15.01.2025, 12:00:00",
        note="hi",
    )
    channel.send.assert_awaited_once_with(
        "lager@example.com", "Upload abgeschlossen - Vorgang #42", "<p/>"
    )


async def test_token_without_email_is_a_no_op() -> None:
    token_repo = AsyncMock()
    token_repo.get_by_id = AsyncMock(return_value=make_token(email=None))
    channel = AsyncMock()
    await _dispatcher(token_repo, channel).notify("tk1", 42, "Wareneingang", 1)
    channel.send.assert_not_awaited()


async def test_channel_failure_is_swallowed() -> None:
    token_repo = AsyncMock()
    token_repo.get_by_id = AsyncMock(return_value=make_token(email="a@example.com"))
    channel = AsyncMock()
    channel.send = AsyncMock(side_effect=NotificationException("502"))
    await _dispatcher(token_repo, channel).notify("tk1", 42, "Wareneingang", 1)
    channel.send.assert_awaited_once()


async def test_lookup_failure_is_swallowed() -> None:
    token_repo = AsyncMock()
    token_repo.get_by_id = AsyncMock(side_effect=RuntimeError("db down"))
    channel = AsyncMock()
    await _dispatcher(token_repo, channel).notify("tk1", 42, "Wareneingang", 1)
    channel.send.assert_not_awaited()
