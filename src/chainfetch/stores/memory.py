"""In-memory keyset store."""

from __future__ import annotations

from chainfetch.core.exceptions import KeysetNotFoundError
from chainfetch.core.keyset import KeysetHash


class InMemoryKeysetStore:
    """Dict-backed keyset store, mostly useful for tests and local runs."""

    def __init__(self) -> None:
        self._keysets: dict[bytes, bytes] = {}

    def put(self, data: bytes) -> KeysetHash:
        """Store keyset bytes under their content hash."""
        ks_hash = KeysetHash.of(data)
        self._keysets[ks_hash.value] = bytes(data)
        return ks_hash

    def put_raw(self, ks_hash: KeysetHash, data: bytes) -> None:
        """Store bytes under an arbitrary hash without verifying it."""
        self._keysets[ks_hash.value] = bytes(data)

    def __contains__(self, ks_hash: KeysetHash) -> bool:
        return ks_hash.value in self._keysets

    def __len__(self) -> int:
        return len(self._keysets)

    async def keyset_from_hash(self, ks_hash: KeysetHash) -> bytes:
        try:
            return self._keysets[ks_hash.value]
        except KeyError:
            raise KeysetNotFoundError(
                f"Keyset {ks_hash} not in memory store",
                keyset_hash=ks_hash.hex(),
            ) from None
