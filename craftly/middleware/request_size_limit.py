"""Request body size limit middleware.

Rejects bodies larger than max_bytes with 413, whether the size is
declared in Content-Length or only discovered while reading a chunked
body. Raw ASGI.
"""

from collections.abc import Callable

from craftly.middleware._asgi import get_header, send_error


def _too_large(send: Callable, max_bytes: int, actual: int):
    return send_error(
        send,
        413,
        f"Request body must be at most {max_bytes} bytes",
        "REQUEST_TOO_LARGE",
        {"max_bytes": max_bytes, "content_length": actual},
    )


def RequestSizeLimitMiddleware(app: Callable, max_bytes: int) -> Callable:
    """Reject requests whose body exceeds max_bytes. Raw ASGI."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return

        declared = get_header(scope, "content-length")
        if declared is not None and declared.isdigit() and int(declared) > max_bytes:
            await _too_large(send, max_bytes, int(declared))
            return

        received = 0
        rejected = False

        async def limited_receive() -> dict:
            nonlocal received, rejected
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > max_bytes:
                    rejected = True
                    await _too_large(send, max_bytes, received)
                    return {"type": "http.disconnect"}
            return message

        async def guarded_send(message: dict) -> None:
            if not rejected:
                await send(message)

        await app(scope, limited_receive, guarded_send)

    return asgi_app
