"""Read-through cache in front of a keyset store."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chainfetch.cache.decorators import cached
from chainfetch.cache.keys import CacheKeys
from chainfetch.core.keyset import KeysetHash

if TYPE_CHECKING:
    from chainfetch.cache.client import AsyncRedisClient
    from chainfetch.stores.base import KeysetStore


def _hash_matches(data: bytes, ks_hash: KeysetHash) -> bool:
    return ks_hash.matches(data)


class CachingKeysetStore:
    """
    Keyset store decorator caching verified keysets in Redis.

    Only bytes that hash to their key are cached or served from the cache,
    so a corrupted entry behaves like a miss.
    """

    def __init__(
        self,
        backing: "KeysetStore",
        cache: "AsyncRedisClient | None",
        ttl: int = 3600,
    ) -> None:
        self._backing = backing
        self._cache = cache
        self._cache_ttl = ttl

    @cached(CacheKeys.keyset, validator=_hash_matches)
    async def keyset_from_hash(self, ks_hash: KeysetHash) -> bytes:
        return await self._backing.keyset_from_hash(ks_hash)
