"""Request ID middleware.

Generates or forwards X-Request-ID, exposes it as request.state.request_id
(copied into audit metadata) and echoes it on the response.
Client-provided values are sanitized (length + character set) to prevent log injection.
"""

import re
import uuid
from typing import Callable

from app.middleware._asgi import get_header

REQUEST_ID_MAX_LENGTH = 64
REQUEST_ID_ALLOWED_PATTERN = re.compile(
    r"^[a-zA-Z0-9_-]{1," + str(REQUEST_ID_MAX_LENGTH) + r"}$"
)


def sanitize_request_id(raw: str | None) -> str:
    """Return raw if it is a safe token; otherwise a fresh UUID4."""
    candidate = (raw or "").strip()
    if REQUEST_ID_ALLOWED_PATTERN.match(candidate):
        return candidate
    return str(uuid.uuid4())


def RequestIDMiddleware(app: Callable, header_name: str = "X-Request-ID") -> Callable:
    """Raw ASGI wrapper; non-HTTP scopes pass through untouched."""
    header_bytes = header_name.lower().encode()

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        request_id = sanitize_request_id(get_header(scope, header_name))
        scope.setdefault("state", {})["request_id"] = request_id

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start":
                message["headers"] = [
                    *message.get("headers", []),
                    (header_bytes, request_id.encode()),
                ]
            await send(message)

        await app(scope, receive, send_wrapper)

    return asgi_app
