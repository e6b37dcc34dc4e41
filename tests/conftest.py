"""Shared test fixtures for all tests."""

from __future__ import annotations

import pytest

from chainfetch.config import ChainFetchSettings
from chainfetch.core.keyset import KeysetHash

# ============================================================================
# Test Data Constants
# ============================================================================


# Lowercase so checksumming is exercised by the client
INBOX_ADDRESS = "0x1c479675ad559dc151f6ec7ed3fbf8cee79582b6"
RPC_URL = "http://ledger.test:8545/"
INNER_STORE_URL = "http://das.test:9877"

SAMPLE_KEYSET = bytes.fromhex(
    "0000000000000001"  # assumed honest
    "0000000000000002"  # key count
) + b"\x11" * 96 + b"\x22" * 96
OTHER_KEYSET = b"another keyset payload"

REGISTRATION_BLOCK = 15_411_056


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def sample_keyset() -> bytes:
    """Keyset payload registered on the fake ledger."""
    return SAMPLE_KEYSET


@pytest.fixture
def sample_hash() -> KeysetHash:
    """Hash of the sample keyset."""
    return KeysetHash.of(SAMPLE_KEYSET)


@pytest.fixture
def other_hash() -> KeysetHash:
    """Hash of a keyset that is registered nowhere."""
    return KeysetHash.of(OTHER_KEYSET)


# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture
def mock_settings() -> ChainFetchSettings:
    """Create mock settings for testing."""
    return ChainFetchSettings(
        l1_url=RPC_URL,
        sequencer_inbox_address=INBOX_ADDRESS,
        inner_store_url=INNER_STORE_URL,
        redis_url=None,
        rpc_requests_per_second=1000.0,
        request_timeout=5.0,
        debug=True,
        log_level="DEBUG",
    )


@pytest.fixture
def mock_settings_minimal() -> ChainFetchSettings:
    """Create minimal settings without optional services."""
    return ChainFetchSettings(
        l1_url=RPC_URL,
        sequencer_inbox_address=INBOX_ADDRESS,
        inner_store_url=None,
        redis_url=None,
        rpc_requests_per_second=1000.0,
    )


@pytest.fixture
def rpc_url() -> str:
    """JSON-RPC endpoint of the mocked ledger node."""
    return RPC_URL


@pytest.fixture
def inbox_address() -> str:
    """SequencerInbox address used by the mocked ledger."""
    return INBOX_ADDRESS


@pytest.fixture
def inner_store_url() -> str:
    """Base URL of the mocked REST inner store."""
    return INNER_STORE_URL


@pytest.fixture
def registration_block() -> int:
    """Block at which the sample keyset is registered."""
    return REGISTRATION_BLOCK
