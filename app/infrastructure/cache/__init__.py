"""Cache: Redis service, runtime message cache and key builders.

CacheService uses app.core.config; key format is in keys.py.
"""

from app.infrastructure.cache.keys import (
    runtime_message_key,
    runtime_message_pattern,
    runtime_store_key,
    runtime_store_pattern,
)
from app.infrastructure.cache.redis_cache import CacheService
from app.infrastructure.cache.runtime_message_cache import RuntimeMessageCache

__all__ = [
    "CacheService",
    "RuntimeMessageCache",
    "runtime_message_key",
    "runtime_message_pattern",
    "runtime_store_key",
    "runtime_store_pattern",
]
