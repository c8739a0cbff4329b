"""Request context middleware.

Resolves the request id, correlation id and acting user of each request,
stores them in app.shared.context for logs and audit records, and echoes
the ids on the response. Client-provided ids are sanitized (length +
character set) to prevent log injection; an actor header outside the
allowed character set is rejected with 400.
Uses raw ASGI (no BaseHTTPMiddleware) so contextvars set here are visible
to the endpoint.
"""

import re
from typing import Callable

from app.core.constants import ACTOR_MAX_LENGTH, ACTOR_PATTERN
from app.middleware._asgi import get_header, send_json_error
from app.shared.context import clear_request_context, set_request_context
from app.shared.utils.generators import generate_request_id

# Safe for logging: alphanumeric, hyphen, underscore; max length to avoid abuse.
REQUEST_ID_MAX_LENGTH = 64
REQUEST_ID_ALLOWED_PATTERN = re.compile(
    r"^[a-zA-Z0-9_-]{1," + str(REQUEST_ID_MAX_LENGTH) + r"}$"
)
ACTOR_ALLOWED_PATTERN = re.compile(ACTOR_PATTERN)


def _sanitize_id(raw: str | None) -> str | None:
    """Return raw if valid and safe, otherwise None."""
    if not raw:
        return None
    value = raw.strip()
    return value if REQUEST_ID_ALLOWED_PATTERN.match(value) else None


def _is_safe_actor(value: str) -> bool:
    return len(value) <= ACTOR_MAX_LENGTH and bool(ACTOR_ALLOWED_PATTERN.fullmatch(value))


def RequestContextMiddleware(
    app: Callable,
    request_id_header: str = "X-Request-ID",
    correlation_id_header: str = "X-Correlation-ID",
    actor_header: str = "X-Actor-ID",
) -> Callable:
    """Populate request context and echo request/correlation ids. Raw ASGI."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        request_id = (
            _sanitize_id(get_header(scope, request_id_header)) or generate_request_id()
        )
        correlation_id = (
            _sanitize_id(get_header(scope, correlation_id_header)) or request_id
        )
        actor_id = (get_header(scope, actor_header) or "").strip() or None

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                headers.append((request_id_header.encode(), request_id.encode()))
                headers.append(
                    (correlation_id_header.encode(), correlation_id.encode())
                )
                message["headers"] = headers
            await send(message)

        if actor_id is not None and not _is_safe_actor(actor_id):
            await send_json_error(
                send_wrapper,
                400,
                "VALIDATION_ERROR",
                f"{actor_header} must be at most {ACTOR_MAX_LENGTH} letters, "
                "digits or ._@+-",
                {"field": actor_header},
            )
            return

        state = scope.setdefault("state", {})
        state["request_id"] = request_id
        state["correlation_id"] = correlation_id
        set_request_context(
            actor_id=actor_id, request_id=request_id, correlation_id=correlation_id
        )
        try:
            await app(scope, receive, send_wrapper)
        finally:
            clear_request_context()

    return asgi_app
