"""Redis-backed cache of published messages (implements IRuntimeMessageCache)."""

from __future__ import annotations

import logging

from app.application.dtos.runtime import PublishedMessage
from app.application.interfaces.services import ICacheService
from app.infrastructure.cache.keys import (
    runtime_message_key,
    runtime_message_pattern,
    runtime_store_key,
    runtime_store_pattern,
)

logger = logging.getLogger(__name__)


class RuntimeMessageCache:
    """Cache-aside storage for the runtime read path.

    Entries hold published content only. Any pointer change of a key drops
    that key's entries and the listings of its store.
    """

    def __init__(self, cache: ICacheService, ttl: int = 300) -> None:
        self.cache = cache
        self.ttl = ttl

    async def get_message(
        self, message_store_id: int, message_key: str, language: str
    ) -> PublishedMessage | None:
        data = await self.cache.get(
            runtime_message_key(message_store_id, message_key, language)
        )
        if not isinstance(data, dict):
            return None
        return PublishedMessage.from_cache(data)

    async def set_message(self, message: PublishedMessage) -> None:
        await self.cache.set(
            runtime_message_key(
                message.message_store_id, message.message_key, message.language
            ),
            message.to_cache(),
            ttl=self.ttl,
        )

    async def get_store(
        self, message_store_id: int, language: str
    ) -> list[PublishedMessage] | None:
        data = await self.cache.get(runtime_store_key(message_store_id, language))
        if not isinstance(data, list):
            return None
        return [PublishedMessage.from_cache(item) for item in data]

    async def set_store(
        self, message_store_id: int, language: str, messages: list[PublishedMessage]
    ) -> None:
        await self.cache.set(
            runtime_store_key(message_store_id, language),
            [m.to_cache() for m in messages],
            ttl=self.ttl,
        )

    async def invalidate_key(self, message_store_id: int, message_key: str) -> None:
        """Drop cached content of a key in every language and its store listings."""
        if not self.cache.is_available():
            return
        removed = await self.cache.delete_pattern(
            runtime_message_pattern(message_store_id, message_key)
        )
        removed += await self.cache.delete_pattern(runtime_store_pattern(message_store_id))
        logger.debug(
            "Runtime cache invalidated for %s/%s (%s entries)",
            message_store_id,
            message_key,
            removed,
        )
