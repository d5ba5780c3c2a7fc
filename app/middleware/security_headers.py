"""Security headers middleware.

Adds standard hardening headers to every HTTP response unless the
endpoint already set them. The API serves JSON only, hence the strict CSP.
"""

from typing import Callable

DEFAULT_HEADERS = {
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Cache-Control": "no-store",
}


def SecurityHeadersMiddleware(
    app: Callable, headers: dict[str, str] | None = None
) -> Callable:
    """Raw ASGI wrapper; headers overrides DEFAULT_HEADERS entirely when given."""
    extra = [
        (name.lower().encode(), value.encode())
        for name, value in (headers if headers is not None else DEFAULT_HEADERS).items()
    ]

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start":
                current = list(message.get("headers", []))
                present = {name.lower() for name, _ in current}
                current.extend(h for h in extra if h[0] not in present)
                message["headers"] = current
            await send(message)

        await app(scope, receive, send_wrapper)

    return asgi_app
