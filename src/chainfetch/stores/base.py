"""Keyset store capability."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from chainfetch.core.keyset import KeysetHash


@runtime_checkable
class KeysetStore(Protocol):
    """Anything that can look up keyset bytes by hash."""

    async def keyset_from_hash(self, ks_hash: KeysetHash) -> bytes:
        """
        Return the keyset bytes stored under a hash.

        Implementations may be stale or untrusted; callers that need the
        content guarantee must check the hash themselves.
        """
        ...
