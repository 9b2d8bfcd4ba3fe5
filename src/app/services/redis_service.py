"""Redis service for order sequences and session caching."""

import hashlib
import json
from typing import Any

from redis.asyncio import Redis

from app.core.redis import get_redis


class RedisService:
    """Service class for Redis operations."""

    # Raise the day's counter to the highest stored sequence when it is
    # missing or behind (Redis restored from an older snapshot), then
    # increment; both happen atomically inside Redis
    NEXT_SEQUENCE_SCRIPT = """
    local floor = tonumber(ARGV[1])
    local current = tonumber(redis.call("GET", KEYS[1]) or "-1")
    if current < floor then
        redis.call("SET", KEYS[1], floor, "EX", ARGV[2])
    end
    return redis.call("INCR", KEYS[1])
    """

    def __init__(self, redis: Redis):
        """Initialize Redis service with a Redis client.

        Args:
            redis: Async Redis client instance
        """
        self.redis = redis
        self._next_sequence_script = None

    async def _get_next_sequence_script(self):
        """Get or register the order sequence Lua script."""
        if self._next_sequence_script is None:
            self._next_sequence_script = self.redis.register_script(
                self.NEXT_SEQUENCE_SCRIPT
            )
        return self._next_sequence_script

    # ==================== Order Sequence ====================

    async def next_order_sequence(self, prefix: str, floor: int, ttl: int) -> int:
        """Atomically take the next order sequence number for a day.

        Key pattern: order_seq:{YYYYMMDD}

        Args:
            prefix: Day prefix of the order number (YYYYMMDD)
            floor: Highest sequence already stored for that day; the counter
                never hands out a number at or below it
            ttl: Key lifetime in seconds

        Returns:
            The new sequence number
        """
        script = await self._get_next_sequence_script()
        result = await script(keys=[f"order_seq:{prefix}"], args=[floor, ttl])
        return int(result)

    # ==================== Session Cache ====================

    @staticmethod
    def _session_key(token: str) -> str:
        return f"session:{hashlib.sha256(token.encode()).hexdigest()[:32]}"

    async def cache_session(self, token: str, data: dict[str, Any], ttl: int) -> None:
        """Cache the user resolved for a session token."""
        await self.redis.setex(self._session_key(token), ttl, json.dumps(data))

    async def get_cached_session(self, token: str) -> dict[str, Any] | None:
        """Get the cached user for a session token."""
        raw = await self.redis.get(self._session_key(token))
        if raw is None:
            return None
        return json.loads(raw)

    async def invalidate_session(self, token: str) -> None:
        await self.redis.delete(self._session_key(token))


async def get_redis_service() -> RedisService:
    """Get RedisService instance with shared Redis connection pool."""
    redis = await get_redis()
    return RedisService(redis)
