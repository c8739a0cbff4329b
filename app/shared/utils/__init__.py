"""Shared utilities: datetime and id generators."""

from app.shared.utils.datetime import ensure_utc, utc_now
from app.shared.utils.generators import generate_cuid, generate_request_id

__all__ = [
    "ensure_utc",
    "generate_cuid",
    "generate_request_id",
    "utc_now",
]
