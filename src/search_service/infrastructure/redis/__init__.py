"""Redis cache for catalog-derived lookups, with graceful degradation."""

from typing import Any

import orjson
import redis.asyncio as aioredis
import structlog

from search_service.config import get_settings

logger = structlog.get_logger()

_redis_client: aioredis.Redis | None = None
_redis_checked = False


async def get_redis_client() -> aioredis.Redis | None:
    """Get or create the global async Redis client.

    Returns None when caching is disabled or Redis did not answer the
    first ping; the outcome is remembered for the life of the process.
    """
    global _redis_client, _redis_checked
    if _redis_checked:
        return _redis_client
    _redis_checked = True

    settings = get_settings()
    if not settings.cache_enabled:
        logger.info("Search cache disabled by configuration")
        return None

    try:
        _redis_client = aioredis.from_url(
            settings.redis_url,
            decode_responses=False,
            socket_connect_timeout=2,
            socket_timeout=2,
            retry_on_timeout=True,
        )
        await _redis_client.ping()
        logger.info("Redis connection established")
    except Exception as e:
        logger.warning("Redis unavailable, search cache disabled", error=str(e))
        _redis_client = None
    return _redis_client


async def close_redis() -> None:
    """Close the Redis connection on shutdown."""
    global _redis_client, _redis_checked
    if _redis_client:
        await _redis_client.close()
    _redis_client = None
    _redis_checked = False


class CacheService:
    """Namespaced JSON cache. Every operation no-ops if Redis is unavailable."""

    def __init__(self, client: aioredis.Redis | None, namespace: str = "search"):
        self.client = client
        self.namespace = namespace

    def key(self, *parts: Any) -> str:
        return ":".join([self.namespace, *(str(p) for p in parts)])

    async def get(self, key: str) -> Any | None:
        if not self.client:
            return None
        try:
            data = await self.client.get(key)
            if data:
                return orjson.loads(data)
        except Exception as e:
            logger.warning("Cache get failed", key=key, error=str(e))
        return None

    async def set(self, key: str, value: Any, ttl_seconds: int = 60) -> None:
        if not self.client or ttl_seconds <= 0:
            return
        try:
            await self.client.set(key, orjson.dumps(value), ex=ttl_seconds)
        except Exception as e:
            logger.warning("Cache set failed", key=key, error=str(e))

    async def health_check(self) -> bool:
        if not self.client:
            return False
        try:
            return bool(await self.client.ping())
        except Exception:
            return False
