"""Runtime read path and cache dependencies (composition root)."""

from __future__ import annotations

from fastapi import Request

from app.application.interfaces.services import IRuntimeMessageCache
from app.application.use_cases.runtime import RuntimeMessageService
from app.core.config import get_settings
from app.infrastructure.cache.runtime_message_cache import RuntimeMessageCache
from app.infrastructure.persistence.repositories import MessageKeyRepository

from .db import ReadSession


def get_runtime_cache(request: Request) -> IRuntimeMessageCache | None:
    """Return the runtime message cache, or None when Redis is disabled."""
    cache = getattr(request.app.state, "cache", None)
    if cache is None:
        return None
    return RuntimeMessageCache(cache, ttl=get_settings().cache_ttl_runtime_messages)


async def get_runtime_message_service(
    request: Request, db: ReadSession
) -> RuntimeMessageService:
    """Build RuntimeMessageService over a read session and the shared cache."""
    return RuntimeMessageService(MessageKeyRepository(db), get_runtime_cache(request))
