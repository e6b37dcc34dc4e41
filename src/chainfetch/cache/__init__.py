"""Caching layer with Redis."""

from .client import AsyncRedisClient
from .decorators import cached
from .keys import CacheKeys
from .store import CachingKeysetStore

__all__ = [
    "AsyncRedisClient",
    "CacheKeys",
    "CachingKeysetStore",
    "cached",
]
