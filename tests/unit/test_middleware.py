"""Request id and request size middleware on a minimal app."""

from fastapi import FastAPI, Request
from httpx import ASGITransport, AsyncClient

from app.middleware import RequestIDMiddleware, RequestSizeLimitMiddleware
from app.middleware.request_id import resolve_request_id
from app.shared.context import get_request_id


def _app(max_bytes: int = 16) -> FastAPI:
    app = FastAPI()

    @app.get("/echo")
    async def echo() -> dict:
        return {"request_id": get_request_id()}

    @app.post("/body")
    async def body(request: Request) -> dict:
        return {"size": len(await request.body())}

    app.add_middleware(RequestSizeLimitMiddleware, max_bytes=max_bytes)
    app.add_middleware(RequestIDMiddleware)
    return app


def _client(app: FastAPI) -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


def test_resolve_request_id() -> None:
    assert resolve_request_id("abc-123") == "abc-123"
    assert len(resolve_request_id(None)) == 32
    assert resolve_request_id("bad id\n") != "bad id\n"
    assert len(resolve_request_id("x" * 65)) == 32


async def test_request_id_forwarded_and_bound() -> None:
    async with _client(_app()) as client:
        resp = await client.get("/echo", headers={"X-Request-ID": "req-1"})
    assert resp.headers["x-request-id"] == "req-1"
    assert resp.json() == {"request_id": "req-1"}


async def test_request_id_generated() -> None:
    async with _client(_app()) as client:
        resp = await client.get("/echo")
    assert len(resp.headers["x-request-id"]) == 32


async def test_oversized_body_rejected() -> None:
    async with _client(_app(max_bytes=16)) as client:
        ok = await client.post("/body", content=b"x" * 16)
        too_big = await client.post("/body", content=b"x" * 17)
    assert ok.json() == {"size": 16}
    assert too_big.status_code == 413
