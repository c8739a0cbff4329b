"""Request context management using contextvars.

Async-safe storage for request-scoped data: the acting user (from the
actor header) and the request/correlation ids used in logs and audit.

Usage:
    set_request_context(actor_id="jdoe", request_id="...")
    actor = get_current_actor_id()
"""

from contextvars import ContextVar
from dataclasses import dataclass

_current_actor_id: ContextVar[str | None] = ContextVar("current_actor_id", default=None)
_current_request_id: ContextVar[str | None] = ContextVar(
    "current_request_id", default=None
)
_current_correlation_id: ContextVar[str | None] = ContextVar(
    "current_correlation_id", default=None
)


@dataclass(frozen=True)
class RequestContext:
    """Immutable snapshot of the current request context."""

    actor_id: str | None
    request_id: str | None = None
    correlation_id: str | None = None


def set_request_context(
    actor_id: str | None = None,
    request_id: str | None = None,
    correlation_id: str | None = None,
) -> None:
    """Set the context for this request. Scoped to the current async task."""
    _current_actor_id.set(actor_id or None)
    _current_request_id.set(request_id)
    _current_correlation_id.set(correlation_id)


def clear_request_context() -> None:
    """Reset all request-scoped values."""
    _current_actor_id.set(None)
    _current_request_id.set(None)
    _current_correlation_id.set(None)


def get_current_actor_id() -> str | None:
    """Return the actor supplied with the request, or None."""
    return _current_actor_id.get()


def get_current_request_id() -> str | None:
    return _current_request_id.get()


def get_current_correlation_id() -> str | None:
    return _current_correlation_id.get()


def get_request_context() -> RequestContext:
    """Return a snapshot of the current request context."""
    return RequestContext(
        actor_id=_current_actor_id.get(),
        request_id=_current_request_id.get(),
        correlation_id=_current_correlation_id.get(),
    )
