"""Request ID middleware.

Forwards a client-supplied request id when it is safe to log, otherwise
generates one. The id is bound to the logging context (app.shared.context)
for the duration of the request and echoed on the response.
Raw ASGI, so streaming responses are not buffered.
"""

import re
import uuid
from typing import Callable

from app.shared.context import set_request_id

REQUEST_ID_MAX_LENGTH = 64
_SAFE_REQUEST_ID = re.compile(r"^[A-Za-z0-9_-]{1,%d}$" % REQUEST_ID_MAX_LENGTH)


def header_value(scope: dict, name: str) -> str | None:
    """First value of header name (case-insensitive), decoded leniently."""
    wanted = name.lower().encode()
    for key, value in scope.get("headers", []):
        if key.lower() == wanted:
            return value.decode("utf-8", errors="replace")
    return None


def resolve_request_id(raw: str | None) -> str:
    """Return raw (stripped) when it matches the safe pattern; else a fresh hex id."""
    candidate = (raw or "").strip()
    if _SAFE_REQUEST_ID.match(candidate):
        return candidate
    return uuid.uuid4().hex


def RequestIDMiddleware(app: Callable, header_name: str = "X-Request-ID") -> Callable:
    """Bind a request id per HTTP request and return it in header_name."""
    encoded_header = header_name.lower().encode()

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        request_id = resolve_request_id(header_value(scope, header_name))
        scope.setdefault("state", {})["request_id"] = request_id
        set_request_id(request_id)

        async def send_with_id(message: dict) -> None:
            if message["type"] == "http.response.start":
                message["headers"] = [
                    *message.get("headers", []),
                    (encoded_header, request_id.encode()),
                ]
            await send(message)

        try:
            await app(scope, receive, send_with_id)
        finally:
            set_request_id(None)

    return asgi_app
