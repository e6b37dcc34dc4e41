"""Integration test fixtures for Redis and the API."""

from __future__ import annotations

import os
from typing import AsyncGenerator, AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient

from chainfetch.core.keyset import KeysetHash
from chainfetch.core.models import BlockRange, RegistrationEvent
from chainfetch.ledger.base import LedgerClient


class RecordingLedger(LedgerClient):
    """In-process ledger holding registrations in a dict."""

    def __init__(self) -> None:
        self.registrations: dict[bytes, tuple[int, bytes]] = {}
        self.queries = 0

    def register(self, keyset: bytes, block_number: int) -> KeysetHash:
        ks_hash = KeysetHash.of(keyset)
        self.registrations[ks_hash.value] = (block_number, keyset)
        return ks_hash

    async def registration_block_of(self, ks_hash: KeysetHash) -> int:
        self.queries += 1
        block_number, _ = self.registrations.get(ks_hash.value, (0, b""))
        return block_number

    async def scan_registration_events(
        self,
        block_range: BlockRange,
        ks_hash: KeysetHash,
    ) -> AsyncGenerator[RegistrationEvent, None]:
        for digest, (block_number, keyset) in self.registrations.items():
            if block_range.start <= block_number <= block_range.end:
                yield RegistrationEvent(
                    keyset_hash=digest,
                    keyset_bytes=keyset,
                    block_number=block_number,
                )


# ============================================================================
# Redis Fixtures (Optional - skipped if not available)
# ============================================================================


@pytest.fixture
def redis_url() -> str:
    """Get test Redis URL from environment or use default."""
    return os.getenv("TEST_REDIS_URL", "redis://localhost:6379/15")


@pytest.fixture
async def redis_client(redis_url: str):
    """Create Redis client for testing (optional)."""
    from chainfetch.cache.client import AsyncRedisClient

    client = AsyncRedisClient(redis_url)
    await client.connect()
    try:
        await client.ping()
    except Exception:
        await client.close()
        pytest.skip("Redis not available for integration tests")

    await client._redis.flushdb()
    yield client
    await client._redis.flushdb()
    await client.close()


# ============================================================================
# FastAPI Test Client Fixtures
# ============================================================================


@pytest.fixture
def ledger() -> RecordingLedger:
    """Ledger shared by the app under test."""
    return RecordingLedger()


@pytest.fixture
async def test_app(redis_client, ledger: RecordingLedger):
    """Create test FastAPI application backed by Redis."""
    from chainfetch.api.app import create_app
    from chainfetch.cache.store import CachingKeysetStore
    from chainfetch.resolution.chain_fetch import ChainFetchResolver
    from chainfetch.stores.memory import InMemoryKeysetStore

    app = create_app(use_lifespan=False)

    app.state.inner_store = InMemoryKeysetStore()
    app.state.resolver = ChainFetchResolver(
        CachingKeysetStore(app.state.inner_store, redis_client, ttl=60),
        ledger,
    )
    app.state.rpc_client = None
    app.state.cache_client = redis_client

    yield app


@pytest.fixture
async def test_client(test_app) -> AsyncIterator[AsyncClient]:
    """Create async HTTP test client."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# ============================================================================
# Marker Registration
# ============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "requires_redis: mark test as requiring Redis connection",
    )
