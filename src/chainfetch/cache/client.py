"""Async Redis client wrapper."""

from __future__ import annotations

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from chainfetch.core.exceptions import CacheError


class AsyncRedisClient:
    """Async Redis client wrapper storing raw bytes."""

    def __init__(self, redis_url: str) -> None:
        self._redis_url = redis_url
        self._pool: aioredis.ConnectionPool | None = None
        self._redis: aioredis.Redis | None = None

    async def connect(self) -> None:
        """Connect to Redis."""
        self._pool = aioredis.ConnectionPool.from_url(
            self._redis_url,
            max_connections=20,
        )
        self._redis = aioredis.Redis(connection_pool=self._pool)

    async def close(self) -> None:
        """Close the Redis connection."""
        if self._redis:
            await self._redis.aclose()
        if self._pool:
            await self._pool.disconnect()
        self._redis = None
        self._pool = None

    async def ping(self) -> bool:
        """Check the connection."""
        if not self._redis:
            return False
        try:
            return bool(await self._redis.ping())
        except RedisError as e:
            raise CacheError(f"Redis ping failed: {e}") from e

    async def get(self, key: str) -> bytes | None:
        """Get a value from cache."""
        if not self._redis:
            return None
        try:
            return await self._redis.get(key)
        except RedisError as e:
            raise CacheError(f"Redis GET {key} failed: {e}") from e

    async def set(self, key: str, value: bytes, ttl: int = 3600) -> None:
        """Set a value in cache with TTL."""
        if not self._redis:
            return
        try:
            await self._redis.set(key, value, ex=ttl)
        except RedisError as e:
            raise CacheError(f"Redis SET {key} failed: {e}") from e

    async def delete(self, key: str) -> bool:
        """Delete a key from cache."""
        if not self._redis:
            return False
        try:
            return await self._redis.delete(key) > 0
        except RedisError as e:
            raise CacheError(f"Redis DEL {key} failed: {e}") from e

    async def __aenter__(self) -> AsyncRedisClient:
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
