"""Custom exception hierarchy for chainfetch."""

from typing import Any


class ChainFetchError(Exception):
    """Base exception for all chainfetch errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(ChainFetchError):
    """Input validation failed."""

    pass


class KeysetNotFoundError(ChainFetchError):
    """Neither the inner store nor the ledger has a valid keyset for the hash."""

    def __init__(
        self,
        message: str,
        keyset_hash: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.keyset_hash = keyset_hash


class InvalidRegistrationError(ChainFetchError):
    """The ledger reported a registration block outside the block number range."""

    def __init__(
        self,
        message: str,
        block_number: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.block_number = block_number


class LedgerError(ChainFetchError):
    """Base class for ledger client failures."""

    pass


class LedgerTransportError(LedgerError):
    """JSON-RPC or HTTP failure while talking to the ledger node."""

    def __init__(
        self,
        message: str,
        code: int | None = None,
        data: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.code = code
        self.data = data
        self.status_code = status_code


class JsonRpcError(LedgerTransportError):
    """The ledger node answered with a JSON-RPC error object."""

    pass


class LedgerDecodeError(LedgerError):
    """A ledger response could not be decoded."""

    pass


class KeysetNotRegisteredError(LedgerError):
    """The ledger has no registration for the requested keyset hash."""

    def __init__(
        self,
        message: str,
        keyset_hash: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.keyset_hash = keyset_hash


class StoreUnavailableError(ChainFetchError):
    """An inner keyset store could not be reached."""

    def __init__(
        self,
        message: str,
        source: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.source = source
        self.status_code = status_code


class RateLimitError(LedgerTransportError):
    """Rate limit exceeded by the ledger node."""

    def __init__(
        self,
        message: str,
        retry_after: float | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, status_code=429, details=details)
        self.retry_after = retry_after


class CacheError(ChainFetchError):
    """Cache operation failed."""

    pass
