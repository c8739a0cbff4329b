"""Tests for CacheService (redis.asyncio) degradation and JSON handling."""

import redis.asyncio as redis

from app.infrastructure.cache import CacheService


class _StubRedis:
    """Minimal stand-in for redis.asyncio.Redis."""

    def __init__(self, fail_with: Exception | None = None) -> None:
        self.values: dict[str, str] = {}
        self.expiry: dict[str, int] = {}
        self.fail_with = fail_with
        self.closed = False

    async def get(self, key: str) -> str | None:
        if self.fail_with:
            raise self.fail_with
        return self.values.get(key)

    async def setex(self, key: str, ttl: int, value: str) -> None:
        if self.fail_with:
            raise self.fail_with
        self.values[key] = value
        self.expiry[key] = ttl

    async def delete(self, key: str) -> int:
        return 1 if self.values.pop(key, None) is not None else 0

    async def ping(self) -> bool:
        if self.fail_with:
            raise self.fail_with
        return True

    async def aclose(self) -> None:
        self.closed = True


async def test_set_and_get_json() -> None:
    client = _StubRedis()
    cache = CacheService(redis_client=client)
    assert cache.is_available()

    assert await cache.set("msg:1:WELCOME:en", {"content": "Hi", "version": 2}, ttl=30)
    assert client.expiry["msg:1:WELCOME:en"] == 30
    assert await cache.get("msg:1:WELCOME:en") == {"content": "Hi", "version": 2}
    assert await cache.get("msg:1:WELCOME:fr") is None
    assert await cache.delete("msg:1:WELCOME:en")
    assert await cache.ping()


async def test_not_connected_is_a_miss() -> None:
    cache = CacheService()
    assert not cache.is_available()
    assert await cache.get("anything") is None
    assert await cache.set("anything", 1) is False
    assert await cache.delete_pattern("msg:*") == 0
    assert await cache.ping() is False


async def test_connection_loss_degrades_to_miss() -> None:
    """Reconnect is attempted; with REDIS_ENABLED off it fails and the cache turns off."""
    client = _StubRedis(fail_with=redis.ConnectionError("gone"))
    cache = CacheService(redis_client=client)

    assert await cache.get("msg:1:WELCOME:en") is None
    assert client.closed
    assert not cache.is_available()


async def test_redis_error_is_logged_not_raised() -> None:
    cache = CacheService(redis_client=_StubRedis(fail_with=redis.ResponseError("WRONGTYPE")))
    assert await cache.set("k", [1, 2]) is False
    assert cache.is_available()


async def test_connect_skipped_when_disabled() -> None:
    cache = CacheService()
    await cache.connect()
    assert cache.redis is None
    await cache.disconnect()
