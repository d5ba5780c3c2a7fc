"""Request timeout middleware.

Cancels the handler after timeout_seconds. Cancellation unwinds any open
store transaction (rollback), then a 504 is sent if no response has started.
"""

import asyncio
import logging
from typing import Callable

from app.middleware._asgi import send_json_error

logger = logging.getLogger(__name__)


def TimeoutMiddleware(app: Callable, timeout_seconds: int) -> Callable:
    """Raw ASGI wrapper; timeout_seconds <= 0 disables the limit."""
    if timeout_seconds <= 0:
        return app

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        response_started = False

        async def tracking_send(message: dict) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await asyncio.wait_for(app(scope, receive, tracking_send), timeout=timeout_seconds)
        except TimeoutError:
            logger.warning(
                "Request timed out after %ss: %s %s",
                timeout_seconds,
                scope.get("method", ""),
                scope.get("path", ""),
            )
            if response_started:
                return
            await send_json_error(
                send,
                504,
                "GATEWAY_TIMEOUT",
                f"Request timed out after {timeout_seconds} seconds",
                {"timeout_seconds": timeout_seconds},
            )

    return asgi_app
