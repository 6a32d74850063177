"""Request body size limit for multipart intake batches.

A declared Content-Length over the limit is rejected before the body is
read. Bodies without a length (chunked) are read up to the limit and replayed
to the app. Raw ASGI.
"""

import json
from typing import Callable

from app.middleware.request_id import header_value

_BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})


async def _reject(send: Callable, max_bytes: int) -> None:
    body = json.dumps(
        {
            "error": "PAYLOAD_TOO_LARGE",
            "message": f"Request body must be at most {max_bytes} bytes",
            "details": {"max_bytes": max_bytes},
        }
    ).encode()
    await send(
        {
            "type": "http.response.start",
            "status": 413,
            "headers": [(b"content-type", b"application/json")],
        }
    )
    await send({"type": "http.response.body", "body": body, "more_body": False})


def RequestSizeLimitMiddleware(app: Callable, max_bytes: int) -> Callable:
    """Reject request bodies larger than max_bytes with 413."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http" or scope.get("method") not in _BODY_METHODS:
            await app(scope, receive, send)
            return

        declared = header_value(scope, "content-length")
        if declared is not None:
            if declared.isdigit() and int(declared) > max_bytes:
                await _reject(send, max_bytes)
                return
            await app(scope, receive, send)
            return

        buffered: list[dict] = []
        total = 0
        while True:
            message = await receive()
            if message["type"] != "http.request":
                buffered.append(message)
                break
            total += len(message.get("body", b""))
            if total > max_bytes:
                await _reject(send, max_bytes)
                return
            buffered.append(message)
            if not message.get("more_body", False):
                break

        async def replay() -> dict:
            if buffered:
                return buffered.pop(0)
            return await receive()

        await app(scope, replay, send)

    return asgi_app
