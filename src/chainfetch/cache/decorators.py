"""Caching decorators for async methods."""

import logging
from collections.abc import Callable
from functools import wraps
from typing import Any, ParamSpec, TypeVar

from chainfetch.core.exceptions import CacheError

P = ParamSpec("P")
R = TypeVar("R")

logger = logging.getLogger(__name__)


def cached(
    key_builder: Callable[..., str],
    ttl: int = 3600,
    validator: Callable[..., bool] | None = None,
):
    """
    Decorator for read-through caching of async method results.

    Args:
        key_builder: Function that takes the same args as the decorated method
                    and returns a cache key string.
        ttl: Default time to live in seconds, overridden by ``self._cache_ttl``.
        validator: Called as ``validator(value, *args, **kwargs)``; cached or
                   fresh values it rejects are neither returned from nor
                   written to the cache.

    Cache failures degrade to a miss. ``None`` results are never cached.

    Usage:
        @cached(lambda ks_hash: CacheKeys.keyset(ks_hash), validator=check)
        async def keyset_from_hash(self, ks_hash: KeysetHash) -> bytes:
            ...
    """

    def accepts(value: Any, args: tuple, kwargs: dict) -> bool:
        return validator is None or validator(value, *args, **kwargs)

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        async def wrapper(self, *args: P.args, **kwargs: P.kwargs) -> R:
            # Get cache from self._cache if available
            cache = getattr(self, "_cache", None)
            if cache is None:
                return await func(self, *args, **kwargs)

            key = key_builder(*args, **kwargs)

            try:
                cached_value = await cache.get(key)
            except CacheError as e:
                logger.warning(f"Cache read failed for {key}: {e}")
                cached_value = None

            if cached_value is not None:
                if accepts(cached_value, args, kwargs):
                    logger.debug(f"Cache hit: {key}")
                    return cached_value
                logger.debug(f"Discarding invalid cache entry: {key}")

            result = await func(self, *args, **kwargs)

            if result is not None and accepts(result, args, kwargs):
                try:
                    await cache.set(key, result, ttl=getattr(self, "_cache_ttl", ttl))
                except CacheError as e:
                    logger.warning(f"Cache write failed for {key}: {e}")

            return result

        return wrapper

    return decorator
