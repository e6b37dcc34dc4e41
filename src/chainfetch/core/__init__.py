"""Core types, models, and utilities."""

from .exceptions import (
    CacheError,
    ChainFetchError,
    InvalidRegistrationError,
    JsonRpcError,
    KeysetNotFoundError,
    KeysetNotRegisteredError,
    LedgerDecodeError,
    LedgerError,
    LedgerTransportError,
    RateLimitError,
    StoreUnavailableError,
    ValidationError,
)
from .keyset import KEYSET_HASH_LENGTH, KeysetHash, keyset_hash
from .models import MAX_BLOCK_NUMBER, BlockRange, RegistrationEvent, ResolvedKeyset
from .types import BlockTag, KeysetSource

__all__ = [
    # Types
    "BlockTag",
    "KeysetSource",
    # Keysets
    "KEYSET_HASH_LENGTH",
    "KeysetHash",
    "keyset_hash",
    # Models
    "MAX_BLOCK_NUMBER",
    "BlockRange",
    "RegistrationEvent",
    "ResolvedKeyset",
    # Exceptions
    "CacheError",
    "ChainFetchError",
    "InvalidRegistrationError",
    "JsonRpcError",
    "KeysetNotFoundError",
    "KeysetNotRegisteredError",
    "LedgerDecodeError",
    "LedgerError",
    "LedgerTransportError",
    "RateLimitError",
    "StoreUnavailableError",
    "ValidationError",
]
