"""Main library client for standalone usage."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from chainfetch.config import ChainFetchSettings
from chainfetch.core.keyset import KeysetHash
from chainfetch.core.models import ResolvedKeyset
from chainfetch.ledger.ratelimit import RateLimitConfig
from chainfetch.ledger.rpc import JsonRpcClient, RpcConfig
from chainfetch.ledger.sequencer_inbox import SequencerInboxClient
from chainfetch.resolution.chain_fetch import ChainFetchConfig, ChainFetchResolver
from chainfetch.stores.memory import InMemoryKeysetStore
from chainfetch.stores.rest import RestfulKeysetStore, RestStoreConfig

if TYPE_CHECKING:
    from chainfetch.cache.client import AsyncRedisClient
    from chainfetch.stores.base import KeysetStore

logger = logging.getLogger(__name__)


class ChainFetchClient:
    """
    Main client for the chainfetch library.

    Builds the resolver stack from settings and owns every resource it
    creates.

    Usage:
        async with ChainFetchClient() as client:
            keyset = await client.keyset_from_hash("0x5f3c...")

    Settings are loaded from environment variables or can be passed explicitly.
    """

    def __init__(
        self,
        settings: ChainFetchSettings | None = None,
        *,
        use_cache: bool = True,
    ) -> None:
        """
        Initialize the client.

        Args:
            settings: Application settings. If not provided, loaded from environment.
            use_cache: Whether to use Redis caching if configured.
        """
        self._settings = settings or ChainFetchSettings()
        self._use_cache = use_cache
        self._rpc: JsonRpcClient | None = None
        self._rest_store: RestfulKeysetStore | None = None
        self._cache: AsyncRedisClient | None = None
        self._resolver: ChainFetchResolver | None = None

    async def __aenter__(self) -> ChainFetchClient:
        """Initialize resources on context entry."""
        await self._initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Clean up resources on context exit."""
        await self.close()

    @property
    def resolver(self) -> ChainFetchResolver:
        self._ensure_initialized()
        return self._resolver

    @property
    def rpc(self) -> JsonRpcClient | None:
        return self._rpc

    @property
    def cache(self) -> AsyncRedisClient | None:
        return self._cache

    async def _initialize(self) -> None:
        """Initialize client resources."""
        settings = self._settings
        if not settings.sequencer_inbox_address:
            raise RuntimeError("CHAINFETCH_SEQUENCER_INBOX_ADDRESS must be set")

        self._rpc = JsonRpcClient(
            RpcConfig(
                url=settings.l1_url,
                timeout=settings.request_timeout,
                rate_limit=RateLimitConfig(
                    requests_per_second=settings.rpc_requests_per_second,
                    max_429_retries=settings.rpc_max_429_retries,
                    max_backoff=settings.rpc_max_backoff,
                ),
            )
        )
        ledger = SequencerInboxClient(
            self._rpc,
            settings.sequencer_inbox_address,
            max_blocks_per_query=settings.max_blocks_per_query,
        )

        inner: KeysetStore
        if settings.inner_store_url:
            self._rest_store = RestfulKeysetStore(
                RestStoreConfig(base_url=settings.inner_store_url, timeout=settings.request_timeout)
            )
            inner = self._rest_store
        else:
            logger.info("No inner store configured, every lookup goes to the ledger")
            inner = InMemoryKeysetStore()

        if self._use_cache and settings.redis_url:
            try:
                from chainfetch.cache.client import AsyncRedisClient
                from chainfetch.cache.store import CachingKeysetStore

                self._cache = AsyncRedisClient(str(settings.redis_url))
                await self._cache.connect()
                inner = CachingKeysetStore(inner, self._cache, ttl=settings.cache_ttl)
                logger.info("Redis cache initialized")
            except Exception as e:
                logger.warning(f"Failed to initialize cache: {e}")
                self._cache = None

        self._resolver = ChainFetchResolver(
            inner,
            ledger,
            ChainFetchConfig(timeout=settings.resolve_timeout),
        )

    async def close(self) -> None:
        """Close all resources."""
        if self._rpc:
            await self._rpc.close()
            self._rpc = None

        if self._rest_store:
            await self._rest_store.close()
            self._rest_store = None

        if self._cache:
            await self._cache.close()
            self._cache = None

        self._resolver = None

    def _ensure_initialized(self) -> None:
        """Ensure client is initialized."""
        if self._resolver is None:
            raise RuntimeError(
                "Client not initialized. Use 'async with ChainFetchClient() as client:'"
            )

    async def resolve(self, ks_hash: KeysetHash | bytes | str) -> ResolvedKeyset:
        """
        Resolve a keyset, reporting whether it came from the inner store or the ledger.

        Args:
            ks_hash: Keyset hash as KeysetHash, 32 raw bytes, or hex string

        Returns:
            The resolved keyset with its provenance
        """
        self._ensure_initialized()
        return await self._resolver.resolve(KeysetHash.parse(ks_hash))

    async def keyset_from_hash(self, ks_hash: KeysetHash | bytes | str) -> bytes:
        """Resolve a keyset and return its bytes."""
        resolved = await self.resolve(ks_hash)
        return resolved.keyset_bytes


# Convenience function for one-off resolutions
async def fetch_keyset(
    ks_hash: KeysetHash | bytes | str,
    *,
    settings: ChainFetchSettings | None = None,
) -> bytes:
    """
    Resolve a keyset (convenience function).

    For multiple resolutions, use ChainFetchClient for better performance.
    """
    async with ChainFetchClient(settings) as client:
        return await client.keyset_from_hash(ks_hash)
