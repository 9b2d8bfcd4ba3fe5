"""Shared async Redis client.

One connection pool per process; the client is created lazily on first use
and closed from the application lifespan.
"""

from typing import Optional

import redis.asyncio as redis
from redis.asyncio import ConnectionPool
from redis.exceptions import RedisError

from app.core.config import settings

_pool: Optional[ConnectionPool] = None
_client: Optional[redis.Redis] = None


def get_redis_pool() -> ConnectionPool:
    global _pool
    if _pool is None:
        # Session cache values are JSON text, so responses are decoded
        _pool = ConnectionPool.from_url(
            settings.REDIS_URL,
            max_connections=settings.REDIS_MAX_CONNECTIONS,
            decode_responses=True,
            socket_timeout=settings.REDIS_SOCKET_TIMEOUT,
            socket_connect_timeout=settings.REDIS_SOCKET_TIMEOUT,
            retry_on_timeout=True,
        )
    return _pool


async def get_redis() -> redis.Redis:
    """Get the process-wide Redis client."""
    global _client
    if _client is None:
        _client = redis.Redis(connection_pool=get_redis_pool())
    return _client


async def ping_redis() -> bool:
    """Whether Redis answers a PING."""
    client = await get_redis()
    try:
        return bool(await client.ping())
    except RedisError:
        return False


async def close_redis() -> None:
    global _client, _pool
    if _client is not None:
        await _client.aclose()
        _client = None
    if _pool is not None:
        await _pool.disconnect()
        _pool = None
