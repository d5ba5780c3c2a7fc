"""Health endpoint and the ASGI middleware stack."""

import asyncio

from httpx import ASGITransport, AsyncClient
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from app.middleware import RequestSizeLimitMiddleware, TimeoutMiddleware
from app.middleware.request_id import sanitize_request_id


async def test_health(client: AsyncClient):
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "version": "1.0.0", "databaseBackend": "memory"}


async def test_security_headers_present(client: AsyncClient):
    response = await client.get("/api/v1/health")
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
    assert "default-src 'none'" in response.headers["Content-Security-Policy"]


async def test_request_id_generated_and_forwarded(client: AsyncClient):
    generated = await client.get("/api/v1/health")
    assert len(generated.headers["X-Request-ID"]) == 36
    forwarded = await client.get("/api/v1/health", headers={"X-Request-ID": "trace-123"})
    assert forwarded.headers["X-Request-ID"] == "trace-123"


def test_unsafe_request_ids_are_replaced():
    assert sanitize_request_id("ok_id-1") == "ok_id-1"
    assert sanitize_request_id("bad id\nInjected") != "bad id\nInjected"
    assert len(sanitize_request_id("x" * 65)) == 36


async def _echo(request: Request) -> JSONResponse:
    body = await request.body()
    return JSONResponse({"size": len(body)})


async def _slow(request: Request) -> JSONResponse:
    await asyncio.sleep(5)
    return JSONResponse({})


def _bare_app() -> Starlette:
    return Starlette(
        routes=[Route("/echo", _echo, methods=["POST"]), Route("/slow", _slow)]
    )


async def test_oversized_body_is_rejected_with_413():
    app = RequestSizeLimitMiddleware(_bare_app(), max_bytes=10)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://t") as ac:
        ok = await ac.post("/echo", content=b"12345")
        too_big = await ac.post("/echo", content=b"x" * 11)
    assert ok.json() == {"size": 5}
    assert too_big.status_code == 413
    assert too_big.json()["error"] == "PAYLOAD_TOO_LARGE"


async def test_slow_request_times_out_with_504():
    app = TimeoutMiddleware(_bare_app(), timeout_seconds=1)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://t") as ac:
        response = await ac.get("/slow")
    assert response.status_code == 504
    assert response.json()["error"] == "GATEWAY_TIMEOUT"


def test_zero_timeout_disables_wrapper():
    inner = _bare_app()
    assert TimeoutMiddleware(inner, timeout_seconds=0) is inner
