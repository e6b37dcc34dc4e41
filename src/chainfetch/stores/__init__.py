"""Inner keyset stores."""

from chainfetch.stores.base import KeysetStore
from chainfetch.stores.memory import InMemoryKeysetStore
from chainfetch.stores.rest import RestfulKeysetStore, RestStoreConfig

__all__ = [
    "InMemoryKeysetStore",
    "KeysetStore",
    "RestStoreConfig",
    "RestfulKeysetStore",
]
