"""
Module: test_redis_store.py
Description: Unit tests for the Redis list store.

Mocks the redis.asyncio client so no Redis server is required.
"""

from unittest.mock import AsyncMock, patch

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from raincheck.storage.base import ListStore
from raincheck.storage.redis_store import RedisListStore


class TestRedisListStore:
    """Test cases for RedisListStore operations."""

    def test_requires_client(self):
        with pytest.raises(ValueError, match="client is required"):
            RedisListStore(None)

    def test_satisfies_list_store_protocol(self):
        assert isinstance(RedisListStore(AsyncMock()), ListStore)

    def test_from_url(self):
        with patch("raincheck.storage.redis_store.aioredis.from_url") as mock_from_url:
            store = RedisListStore.from_url("redis://cache:6379/2")

        mock_from_url.assert_called_once_with("redis://cache:6379/2", decode_responses=True)
        assert store.client is mock_from_url.return_value

    def test_from_url_invalid(self):
        with pytest.raises(ValueError, match="redis_url must be a non-empty string"):
            RedisListStore.from_url("")

    @pytest.mark.asyncio
    async def test_push_tail_uses_rpush(self):
        client = AsyncMock()
        store = RedisListStore(client)

        await store.push_tail("myList", '{"a":1}')

        client.rpush.assert_awaited_once_with("myList", '{"a":1}')

    @pytest.mark.asyncio
    async def test_pop_head_uses_lpop(self):
        client = AsyncMock()
        client.lpop.return_value = '{"a":1}'
        store = RedisListStore(client)

        assert await store.pop_head("myList") == '{"a":1}'
        client.lpop.assert_awaited_once_with("myList")

    @pytest.mark.asyncio
    async def test_pop_head_decodes_bytes(self):
        client = AsyncMock()
        client.lpop.return_value = b'{"a":1}'

        assert await RedisListStore(client).pop_head("myList") == '{"a":1}'

    @pytest.mark.asyncio
    async def test_pop_head_empty_list(self):
        client = AsyncMock()
        client.lpop.return_value = None

        assert await RedisListStore(client).pop_head("myList") is None

    @pytest.mark.asyncio
    async def test_redis_errors_propagate(self):
        client = AsyncMock()
        client.rpush.side_effect = RedisConnectionError("refused")
        client.lpop.side_effect = RedisConnectionError("refused")
        store = RedisListStore(client)

        with pytest.raises(RedisConnectionError):
            await store.push_tail("myList", "x")
        with pytest.raises(RedisConnectionError):
            await store.pop_head("myList")

    @pytest.mark.asyncio
    async def test_aclose(self):
        client = AsyncMock()

        await RedisListStore(client).aclose()

        client.aclose.assert_awaited_once()
