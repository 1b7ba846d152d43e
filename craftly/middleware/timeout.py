"""Request timeout middleware.

Cancels a request that runs longer than the configured timeout and answers
504 in the API error envelope. Raw ASGI.
"""

import asyncio
import logging
from collections.abc import Callable

from craftly.middleware._asgi import send_error

logger = logging.getLogger(__name__)


def TimeoutMiddleware(app: Callable, timeout_seconds: int) -> Callable:
    """Cancel request after timeout_seconds (sends 504 unless the response already started)."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        started = False

        async def send_wrapper(message: dict) -> None:
            nonlocal started
            if message["type"] == "http.response.start":
                started = True
            await send(message)

        try:
            await asyncio.wait_for(app(scope, receive, send_wrapper), timeout=float(timeout_seconds))
        except TimeoutError:
            logger.warning(
                "Request timed out after %s seconds: %s %s",
                timeout_seconds,
                scope.get("method", ""),
                scope.get("path", ""),
            )
            if not started:
                await send_error(
                    send,
                    504,
                    f"Request timed out after {timeout_seconds} seconds",
                    "GATEWAY_TIMEOUT",
                    {"timeout_seconds": timeout_seconds},
                )

    return asgi_app
