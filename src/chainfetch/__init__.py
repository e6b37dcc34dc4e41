"""chainfetch - keyset resolution by content hash with ledger fallback."""

__version__ = "0.1.0"

from chainfetch.client import ChainFetchClient, fetch_keyset  # noqa: E402
from chainfetch.core.exceptions import (  # noqa: E402
    ChainFetchError,
    InvalidRegistrationError,
    KeysetNotFoundError,
    LedgerError,
    LedgerTransportError,
)
from chainfetch.core.keyset import KeysetHash, keyset_hash  # noqa: E402
from chainfetch.core.models import BlockRange, RegistrationEvent, ResolvedKeyset  # noqa: E402
from chainfetch.core.types import KeysetSource  # noqa: E402
from chainfetch.ledger.base import LedgerClient  # noqa: E402
from chainfetch.resolution.chain_fetch import ChainFetchConfig, ChainFetchResolver  # noqa: E402
from chainfetch.stores.base import KeysetStore  # noqa: E402

__all__ = [
    # Client
    "ChainFetchClient",
    "fetch_keyset",
    # Resolution
    "ChainFetchConfig",
    "ChainFetchResolver",
    "KeysetStore",
    "LedgerClient",
    # Models
    "BlockRange",
    "KeysetHash",
    "KeysetSource",
    "RegistrationEvent",
    "ResolvedKeyset",
    "keyset_hash",
    # Errors
    "ChainFetchError",
    "InvalidRegistrationError",
    "KeysetNotFoundError",
    "LedgerError",
    "LedgerTransportError",
    # Version
    "__version__",
]
