"""Core enums and type definitions."""

from enum import StrEnum


class KeysetSource(StrEnum):
    """Where a resolved keyset came from."""

    INNER_STORE = "inner_store"
    LEDGER = "ledger"


class BlockTag(StrEnum):
    """Named block parameters accepted by Ethereum JSON-RPC."""

    LATEST = "latest"
    SAFE = "safe"
    FINALIZED = "finalized"
