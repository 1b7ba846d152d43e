"""Access log middleware: method, path, status and duration per request. Raw ASGI."""

import logging
import time
from collections.abc import Callable

logger = logging.getLogger("craftly.access")


def RequestLoggingMiddleware(app: Callable) -> Callable:
    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        start = time.perf_counter()
        status = 500

        async def send_wrapper(message: dict) -> None:
            nonlocal status
            if message["type"] == "http.response.start":
                status = message["status"]
            await send(message)

        try:
            await app(scope, receive, send_wrapper)
        finally:
            request_id = scope.get("state", {}).get("request_id", "-")
            logger.info(
                "%s %s %s %.1fms [%s]",
                scope.get("method", ""),
                scope.get("path", ""),
                status,
                (time.perf_counter() - start) * 1000,
                request_id,
            )

    return asgi_app
