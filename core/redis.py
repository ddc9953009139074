"""Redis client, used as the geo-IP response cache."""

import redis.asyncio as redis

from core.config import settings

CACHE_POOL_SIZE = 10

_cache: redis.Redis | None = None


async def get_redis() -> redis.Redis:
    """Get the shared cache client, connecting lazily on first use."""
    global _cache
    if _cache is None:
        pool = redis.ConnectionPool.from_url(
            settings.redis_url,
            decode_responses=True,
            max_connections=CACHE_POOL_SIZE,
        )
        _cache = redis.Redis(connection_pool=pool)
    return _cache


async def ping_redis(client: redis.Redis) -> None:
    await client.ping()


async def close_redis() -> None:
    """Close the cache client and its pool."""
    global _cache
    if _cache is not None:
        await _cache.aclose()
        await _cache.connection_pool.disconnect()
        _cache = None
