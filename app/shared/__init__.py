"""Shared utilities: request context, telemetry, and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from app.shared.context import (
    RequestContext,
    clear_request_context,
    get_current_actor_id,
    get_current_correlation_id,
    get_current_request_id,
    get_request_context,
    set_request_context,
)
from app.shared.utils import ensure_utc, generate_cuid, generate_request_id, utc_now

__all__ = [
    "RequestContext",
    "clear_request_context",
    "ensure_utc",
    "generate_cuid",
    "generate_request_id",
    "get_current_actor_id",
    "get_current_correlation_id",
    "get_current_request_id",
    "get_request_context",
    "set_request_context",
    "utc_now",
]
