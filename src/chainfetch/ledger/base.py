"""Abstract ledger read interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import AsyncGenerator

from chainfetch.core.keyset import KeysetHash
from chainfetch.core.models import BlockRange, RegistrationEvent


class LedgerClient(ABC):
    """
    Read access to the keyset registrations recorded on the ledger.

    Implementations only shape requests, decode responses and translate
    errors. A failed query always raises; an empty result is never an error.
    """

    @abstractmethod
    async def registration_block_of(self, ks_hash: KeysetHash) -> int:
        """
        Look up the block at which a keyset hash was registered.

        Returns:
            The raw block number reported by the ledger; 0 means unregistered

        Raises:
            KeysetNotRegisteredError: the ledger explicitly reports no such keyset
            LedgerError: the query failed
        """
        ...

    @abstractmethod
    def scan_registration_events(
        self,
        block_range: BlockRange,
        ks_hash: KeysetHash,
    ) -> AsyncGenerator[RegistrationEvent, None]:
        """
        Scan registration events in a block range, filtered by keyset hash.

        Returns an async generator: lazy, forward-only and closeable with
        ``aclose()``. Issue a new scan to read the events again.
        """
        ...

    async def close(self) -> None:
        """Release any transport resources."""

    async def __aenter__(self) -> LedgerClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
