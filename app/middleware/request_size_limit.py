"""Request body size limit middleware.

Rejects requests whose body exceeds max_request_size (import batches are the
largest payloads). Enforces the limit for both Content-Length and
Transfer-Encoding: chunked. Uses raw ASGI (no BaseHTTPMiddleware).
"""

from typing import Callable

from app.middleware._asgi import get_header, send_json_error


async def _reject(send: Callable, max_bytes: int, actual: int) -> None:
    await send_json_error(
        send,
        413,
        "PAYLOAD_TOO_LARGE",
        f"Request body must be at most {max_bytes} bytes",
        {"max_bytes": max_bytes, "content_length": actual},
    )


def RequestSizeLimitMiddleware(app: Callable, max_bytes: int) -> Callable:
    """Reject requests whose body exceeds max_bytes (Content-Length or chunked). Raw ASGI."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return

        declared = get_header(scope, "content-length")
        if declared is not None and declared.isdigit():
            if int(declared) > max_bytes:
                await _reject(send, max_bytes, int(declared))
                return
            await app(scope, receive, send)
            return

        # No usable Content-Length: buffer the body and count as it arrives.
        chunks: list[bytes] = []
        total = 0
        while True:
            message = await receive()
            if message["type"] == "http.disconnect":
                return
            if message["type"] != "http.request":
                continue
            body = message.get("body", b"")
            total += len(body)
            if total > max_bytes:
                await _reject(send, max_bytes, total)
                return
            chunks.append(body)
            if not message.get("more_body", False):
                break

        replay = iter(chunks)
        remaining = len(chunks)

        async def replay_receive() -> dict:
            nonlocal remaining
            chunk = next(replay, None)
            if chunk is None:
                return await receive()
            remaining -= 1
            return {"type": "http.request", "body": chunk, "more_body": remaining > 0}

        await app(scope, replay_receive, send)

    return asgi_app
