"""Cache key builders for the runtime read path.

Key components (message keys, language codes) must not contain
CACHE_KEY_SEP to avoid ambiguous or colliding keys. Store ids are ints.
"""

from app.core.constants import (
    CACHE_KEY_SEP,
    CACHE_PREFIX_RUNTIME_MESSAGE,
    CACHE_PREFIX_RUNTIME_STORE,
)


def _validate_key_component(value: str, name: str) -> None:
    """Raise ValueError if value contains the cache key separator.

    Args:
        value: String component used in a cache key.
        name: Name of the component (for error message).

    Raises:
        ValueError: If value contains CACHE_KEY_SEP.
    """
    if CACHE_KEY_SEP in value:
        raise ValueError(
            f"Cache key component {name!r} must not contain separator {CACHE_KEY_SEP!r}"
        )


def runtime_message_key(message_store_id: int, message_key: str, language: str) -> str:
    """Cache key for the published content of one key in one language."""
    _validate_key_component(message_key, "message_key")
    _validate_key_component(language, "language")
    return CACHE_KEY_SEP.join(
        (CACHE_PREFIX_RUNTIME_MESSAGE, str(message_store_id), message_key, language)
    )


def runtime_store_key(message_store_id: int, language: str) -> str:
    """Cache key for all published messages of a store in one language."""
    _validate_key_component(language, "language")
    return CACHE_KEY_SEP.join(
        (CACHE_PREFIX_RUNTIME_STORE, str(message_store_id), language)
    )


def runtime_message_pattern(message_store_id: int, message_key: str) -> str:
    """SCAN pattern matching every language entry of one key."""
    _validate_key_component(message_key, "message_key")
    return CACHE_KEY_SEP.join(
        (CACHE_PREFIX_RUNTIME_MESSAGE, str(message_store_id), message_key, "*")
    )


def runtime_store_pattern(message_store_id: int) -> str:
    """SCAN pattern matching every language listing of one store."""
    return CACHE_KEY_SEP.join((CACHE_PREFIX_RUNTIME_STORE, str(message_store_id), "*"))
