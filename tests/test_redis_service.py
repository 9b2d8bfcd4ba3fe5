"""
Unit tests for RedisService order sequences and session caching.
"""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.services.redis_service import RedisService


class TestNextOrderSequence:
    """Tests for the per-day order sequence counter."""

    @pytest.mark.asyncio
    async def test_calls_script_with_day_key(self):
        redis = AsyncMock()
        script = AsyncMock(return_value=1)
        redis.register_script = MagicMock(return_value=script)

        service = RedisService(redis)
        result = await service.next_order_sequence("20261019", 0, 172800)

        assert result == 1
        script.assert_called_once_with(keys=["order_seq:20261019"], args=[0, 172800])

    @pytest.mark.asyncio
    async def test_script_registered_once(self, mock_redis):
        service = RedisService(mock_redis)

        await service.next_order_sequence("20261019", 0, 60)
        await service.next_order_sequence("20261019", 0, 60)

        mock_redis.register_script.assert_called_once_with(RedisService.NEXT_SEQUENCE_SCRIPT)

    @pytest.mark.asyncio
    async def test_sequential_within_day(self, mock_redis):
        service = RedisService(mock_redis)

        numbers = [await service.next_order_sequence("20261019", 0, 60) for _ in range(3)]

        assert numbers == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_seeded_from_floor(self, mock_redis):
        """A missing counter starts after the highest stored sequence."""
        service = RedisService(mock_redis)

        assert await service.next_order_sequence("20261019", 41, 60) == 42
        # Floor is only used for seeding
        assert await service.next_order_sequence("20261019", 0, 60) == 43

    @pytest.mark.asyncio
    async def test_counter_behind_floor_is_raised(self, mock_redis):
        """A counter restored below the stored maximum jumps past it."""
        mock_redis.register_script.return_value.counters["order_seq:20261019"] = 3
        service = RedisService(mock_redis)

        assert await service.next_order_sequence("20261019", 5, 60) == 6

    def test_script_compares_counter_with_floor(self):
        script = RedisService.NEXT_SEQUENCE_SCRIPT

        assert "GET" in script
        assert "current < floor" in script
        assert "EXISTS" not in script

    @pytest.mark.asyncio
    async def test_days_are_independent(self, mock_redis):
        service = RedisService(mock_redis)

        await service.next_order_sequence("20261019", 0, 60)
        await service.next_order_sequence("20261019", 0, 60)

        assert await service.next_order_sequence("20261020", 0, 60) == 1

    @pytest.mark.asyncio
    async def test_result_converted_to_int(self):
        redis = AsyncMock()
        redis.register_script = MagicMock(return_value=AsyncMock(return_value=b"7"))

        service = RedisService(redis)

        assert await service.next_order_sequence("20261019", 0, 60) == 7


class TestSessionCache:
    """Tests for the session token cache."""

    @pytest.mark.asyncio
    async def test_cache_session_stores_json_with_ttl(self, mock_redis):
        service = RedisService(mock_redis)
        data = {"user_id": "abc", "is_admin": False}

        await service.cache_session("token-1", data, ttl=30)

        key, ttl, payload = mock_redis.setex.call_args.args
        assert key.startswith("session:")
        assert "token-1" not in key
        assert ttl == 30
        assert json.loads(payload) == data

    @pytest.mark.asyncio
    async def test_get_cached_session_miss(self, mock_redis):
        service = RedisService(mock_redis)

        assert await service.get_cached_session("token-1") is None

    @pytest.mark.asyncio
    async def test_get_cached_session_hit(self, mock_redis):
        mock_redis.get = AsyncMock(return_value=json.dumps({"user_id": "abc"}))
        service = RedisService(mock_redis)

        assert await service.get_cached_session("token-1") == {"user_id": "abc"}

    @pytest.mark.asyncio
    async def test_same_token_same_key(self, mock_redis):
        service = RedisService(mock_redis)

        await service.get_cached_session("token-1")
        await service.invalidate_session("token-1")

        assert mock_redis.get.call_args.args[0] == mock_redis.delete.call_args.args[0]
