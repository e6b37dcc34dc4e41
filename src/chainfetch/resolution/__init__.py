"""Keyset resolution with ledger fallback."""

from chainfetch.resolution.chain_fetch import ChainFetchConfig, ChainFetchResolver

__all__ = [
    "ChainFetchConfig",
    "ChainFetchResolver",
]
