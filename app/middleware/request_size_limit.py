"""Request body size limit middleware.

Rejects bodies larger than max_bytes with 413. A declared Content-Length is
checked up front; otherwise (chunked uploads) bytes are counted as the app
reads them and the request is cut off once the limit is crossed.
"""

from typing import Callable

from app.middleware._asgi import get_header, send_json_error


class _BodyTooLarge(Exception):
    def __init__(self, received: int) -> None:
        self.received = received


async def _reject(send: Callable, max_bytes: int, received: int | None) -> None:
    details = {"max_bytes": max_bytes}
    if received is not None:
        details["content_length"] = received
    await send_json_error(
        send,
        413,
        "PAYLOAD_TOO_LARGE",
        f"Request body must be at most {max_bytes} bytes",
        details,
    )


def RequestSizeLimitMiddleware(app: Callable, max_bytes: int) -> Callable:
    """Raw ASGI wrapper enforcing max_bytes per request body."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return

        declared = get_header(scope, "content-length")
        if declared and declared.isdigit() and int(declared) > max_bytes:
            await _reject(send, max_bytes, int(declared))
            return

        received = 0
        response_started = False

        async def counting_receive() -> dict:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > max_bytes:
                    raise _BodyTooLarge(received)
            return message

        async def tracking_send(message: dict) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await app(scope, counting_receive, tracking_send)
        except _BodyTooLarge as exc:
            if response_started:
                raise
            await _reject(send, max_bytes, exc.received)

    return asgi_app
