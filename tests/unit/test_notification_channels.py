"""Notification channels (httpx.MockTransport) and the e-mail renderer."""

import json

import httpx
import pytest

from app.core.config import Settings
from app.domain.exceptions import NotificationException
from app.infrastructure.services.notification_channels import (
    HttpEmailNotificationChannel,
    LogOnlyNotificationChannel,
    create_notification_channel,
)
from app.infrastructure.services.notification_template_renderer import (
    UploadNotificationRenderer,
)


def _channel(handler) -> HttpEmailNotificationChannel:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpEmailNotificationChannel(
        api_url="https://mail.test/emails",
        api_key="key-123",
        sender="intake@example.com",
        http_client=client,
    )


async def test_http_channel_posts_message() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"id": "m1"})

    await _channel(handler).send("lager@example.com", "Betreff", "<p>Hallo</p>")

    assert len(seen) == 1
    request = seen[0]
    assert request.headers["Authorization"] == "Bearer key-123"
    body = json.loads(request.content)
    assert body == {
        "from": "intake@example.com",
        "to": ["lager@example.com"],
        "subject": "Betreff",
        "html": "<p>Hallo</p>",
    }


async def test_http_channel_non_2xx_raises() -> None:
    channel = _channel(lambda request: httpx.Response(500))
    with pytest.raises(NotificationException) as exc_info:
        await channel.send("a@example.com", "s", "h")
    assert exc_info.value.details == {"reason": "e-mail API returned 500"}


async def test_http_channel_transport_error_raises() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(NotificationException):
        await _channel(handler).send("a@example.com", "s", "h")


async def test_log_only_channel_sends_nothing() -> None:
    await LogOnlyNotificationChannel().send("a@example.com", "s", "h")


def test_factory_selects_backend() -> None:
    log_settings = Settings(notification_backend="log")
    assert isinstance(create_notification_channel(log_settings), LogOnlyNotificationChannel)

    http_settings = Settings(
        notification_backend="http", notification_api_key="k", notification_sender="x@example.com"
    )
    with pytest.raises(ValueError):
        create_notification_channel(http_settings)
    channel = create_notification_channel(http_settings, httpx.AsyncClient())
    assert isinstance(channel, HttpEmailNotificationChannel)


def test_renderer_subject_and_body() -> None:
    subject, html = UploadNotificationRenderer().render(
        process_number=42,
        category_name="Wareneingang",
        file_count=2,
        timestamp="15.01.2025, 12:00:00",
        note="Palette 3",
    )
    assert subject == "Upload abgeschlossen - Vorgang #42"
    assert "Vorgang #42" in html
    assert "Wareneingang" in html
    assert "Palette 3" in html
    assert "15.01.2025, 12:00:00" in html


def test_renderer_escapes_free_text_and_omits_empty_note() -> None:
    _, html = UploadNotificationRenderer().render(
        process_number=1,
        category_name="<img src=x onerror=alert(1)>Lager",
        file_count=1,
        timestamp="t",
    )
    assert "<img" not in html
    assert "Notiz" not in html


def test_renderer_escapes_ampersand_once_and_keeps_bracketed_text() -> None:
    _, html = UploadNotificationRenderer().render(
        process_number=7,
        category_name="Lager & Versand",
        file_count=1,
        timestamp="t",
        note="Kunde <Müller> & Söhne",
    )
    assert "Lager &amp; Versand" in html
    assert "Kunde &lt;Müller&gt; &amp; Söhne" in html
    assert "&amp;amp;" not in html
