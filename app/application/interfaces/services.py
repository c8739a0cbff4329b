"""Service interfaces (ports) for the application layer.

Protocols define contracts for application services (DIP).
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.application.dtos.runtime import PublishedMessage


# Cache service interface
class ICacheService(Protocol):
    """Minimal cache protocol for the runtime message cache (DIP)."""

    def is_available(self) -> bool:
        """Return True if cache is connected."""

    async def get(self, key: str) -> Any:
        """Return cached value or None."""

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store value with TTL. Returns True on success."""

    async def delete(self, key: str) -> bool:
        """Delete key. Returns True on success."""

    async def delete_pattern(self, pattern: str) -> int:
        """Delete keys matching pattern. Returns count deleted."""


# Runtime message cache interface
class IRuntimeMessageCache(Protocol):
    """Cache of published content served to the runtime read path (DIP).

    All methods degrade to misses / no-ops when the backend is unavailable.
    """

    async def get_message(
        self, message_store_id: int, message_key: str, language: str
    ) -> PublishedMessage | None:
        """Return cached published message or None."""

    async def set_message(self, message: PublishedMessage) -> None:
        """Cache one published message."""

    async def get_store(
        self, message_store_id: int, language: str
    ) -> list[PublishedMessage] | None:
        """Return cached published messages of a store in language, or None."""

    async def set_store(
        self, message_store_id: int, language: str, messages: list[PublishedMessage]
    ) -> None:
        """Cache the published messages of a store in language."""

    async def invalidate_key(self, message_store_id: int, message_key: str) -> None:
        """Drop every cached entry that may contain content of this key."""


# Post-commit hooks interface
class IPostCommitHooks(Protocol):
    """Work deferred until the current transaction has committed (DIP).

    Used for side effects outside the database (cache invalidation) that
    must not run while readers can still see the pre-commit state.
    """

    def add(self, callback: Callable[[], Awaitable[None]]) -> None:
        """Queue callback to run after a successful commit."""
