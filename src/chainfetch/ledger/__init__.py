"""Ledger read access for keyset registrations."""

from chainfetch.ledger.base import LedgerClient
from chainfetch.ledger.ratelimit import AsyncRateLimiter, RateLimitConfig
from chainfetch.ledger.rpc import JsonRpcClient, RpcConfig
from chainfetch.ledger.sequencer_inbox import SequencerInboxClient

__all__ = [
    # Base
    "LedgerClient",
    # Transport
    "AsyncRateLimiter",
    "JsonRpcClient",
    "RateLimitConfig",
    "RpcConfig",
    # Implementations
    "SequencerInboxClient",
]
