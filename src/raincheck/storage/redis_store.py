"""
Module: redis_store.py
Description: Redis-backed list store for rain checks.

Uses RPUSH to append and LPOP to take from the head of a Redis list, so
each entry is popped by exactly one consumer.

Key Components:
- RedisListStore: ListStore over an already connected redis.asyncio client
- from_url(): Build a store with its own client

Dependencies: redis
"""

from typing import Optional

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from raincheck.utils.logger import get_logger

logger = get_logger(__name__)


class RedisListStore:
    """
    List store backed by Redis lists.

    Example:
        >>> store = RedisListStore.from_url("redis://localhost:6379/0")
        >>> await store.push_tail("webhooks", '{"expires_at": 1}')
        >>> await store.pop_head("webhooks")
        '{"expires_at": 1}'
    """

    def __init__(self, client: aioredis.Redis):
        """
        Initialize Redis list store.

        Args:
            client: Connected redis.asyncio client
        """
        if client is None:
            raise ValueError("client is required")

        self.client = client

    @classmethod
    def from_url(cls, redis_url: str) -> 'RedisListStore':
        if not redis_url or not isinstance(redis_url, str):
            raise ValueError("redis_url must be a non-empty string")

        logger.info("Redis list store initialized", redis_url=redis_url)
        return cls(aioredis.from_url(redis_url, decode_responses=True))

    async def push_tail(self, list_key: str, value: str) -> None:
        """
        Append a value to the tail of a Redis list.

        Raises:
            RedisError: If the Redis command fails
        """
        try:
            await self.client.rpush(list_key, value)
        except RedisError as e:
            logger.error(
                "Failed to push to Redis list",
                list_key=list_key,
                error=str(e)
            )
            raise

    async def pop_head(self, list_key: str) -> Optional[str]:
        """
        Pop the head of a Redis list.

        Returns:
            The popped value, or None if the list is empty

        Raises:
            RedisError: If the Redis command fails
        """
        try:
            value = await self.client.lpop(list_key)
        except RedisError as e:
            logger.error(
                "Failed to pop from Redis list",
                list_key=list_key,
                error=str(e)
            )
            raise

        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    async def aclose(self) -> None:
        await self.client.aclose()
