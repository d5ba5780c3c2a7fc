"""Raw ASGI helpers shared by the middleware in this package."""

import json
from typing import Any, Callable


def get_header(scope: dict, name: str) -> str | None:
    """Return first header value for name (case-insensitive). Headers are (bytes, bytes)."""
    want = name.lower().encode()
    for k, v in scope.get("headers", []):
        if k.lower() == want:
            return v.decode("utf-8", errors="replace")
    return None


async def send_json_error(
    send: Callable,
    status: int,
    error: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> None:
    """Send a complete JSON error response in the DocflowException body shape."""
    body = json.dumps(
        {"error": error, "message": message, "details": details or {}}
    ).encode()
    await send(
        {
            "type": "http.response.start",
            "status": status,
            "headers": [
                (b"content-type", b"application/json"),
                (b"content-length", str(len(body)).encode()),
            ],
        }
    )
    await send({"type": "http.response.body", "body": body, "more_body": False})
