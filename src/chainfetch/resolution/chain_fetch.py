"""Keyset resolution with ledger fallback."""

from __future__ import annotations

import asyncio
import logging
from contextlib import aclosing, nullcontext
from dataclasses import dataclass

from chainfetch.core.exceptions import (
    InvalidRegistrationError,
    KeysetNotFoundError,
    KeysetNotRegisteredError,
)
from chainfetch.core.keyset import KeysetHash
from chainfetch.core.models import MAX_BLOCK_NUMBER, BlockRange, ResolvedKeyset
from chainfetch.core.types import KeysetSource
from chainfetch.ledger.base import LedgerClient
from chainfetch.stores.base import KeysetStore

logger = logging.getLogger(__name__)


@dataclass
class ChainFetchConfig:
    """Configuration for ledger fallback resolution."""

    # Deadline for a whole resolution (seconds), None to rely on the caller
    timeout: float | None = None


class ChainFetchResolver:
    """
    Resolves keysets from an inner store, falling back to the ledger.

    The inner store is fast but untrusted: its answer is only returned when
    it hashes to the requested value. Anything else (an error, missing
    data, bytes with the wrong hash) sends the lookup to the ledger, which
    recorded the keyset when it was registered.

    The resolver is itself a KeysetStore, so resolvers can be stacked.
    It references the inner store and ledger client without owning them.
    """

    def __init__(
        self,
        inner: KeysetStore,
        ledger: LedgerClient,
        config: ChainFetchConfig | None = None,
    ) -> None:
        self._inner = inner
        self._ledger = ledger
        self.config = config or ChainFetchConfig()

    async def keyset_from_hash(self, ks_hash: KeysetHash) -> bytes:
        """Return keyset bytes whose Keccak-256 hash equals ks_hash."""
        resolved = await self.resolve(ks_hash)
        return resolved.keyset_bytes

    async def resolve(self, ks_hash: KeysetHash | bytes | str) -> ResolvedKeyset:
        """
        Resolve a keyset and report where it came from.

        Raises:
            KeysetNotFoundError: no valid keyset in the inner store or on the ledger
            InvalidRegistrationError: the ledger reported an out-of-range block
            LedgerError: a ledger query failed
            TimeoutError: the configured deadline expired
        """
        ks_hash = KeysetHash.parse(ks_hash)
        deadline = (
            asyncio.timeout(self.config.timeout)
            if self.config.timeout is not None
            else nullcontext()
        )
        async with deadline:
            data = await self._try_inner(ks_hash)
            if data is not None:
                return ResolvedKeyset(
                    keyset_hash=ks_hash,
                    keyset_bytes=data,
                    source=KeysetSource.INNER_STORE,
                )
            return await self._fetch_from_ledger(ks_hash)

    async def _try_inner(self, ks_hash: KeysetHash) -> bytes | None:
        """Fast path. Errors and hash mismatches both count as a miss."""
        try:
            data = await self._inner.keyset_from_hash(ks_hash)
        except Exception as e:
            logger.debug(f"Inner store miss for {ks_hash}: {e}")
            return None

        if not isinstance(data, bytes) or not ks_hash.matches(data):
            logger.debug(f"Inner store returned mismatched bytes for {ks_hash}")
            return None
        return data

    async def _fetch_from_ledger(self, ks_hash: KeysetHash) -> ResolvedKeyset:
        logger.info(f"Fetching keyset {ks_hash} from the ledger")

        try:
            block_number = await self._ledger.registration_block_of(ks_hash)
        except KeysetNotRegisteredError as e:
            raise KeysetNotFoundError(
                f"Keyset {ks_hash} is not registered on the ledger",
                keyset_hash=ks_hash.hex(),
            ) from e

        if block_number == 0:
            raise KeysetNotFoundError(
                f"Keyset {ks_hash} is not registered on the ledger",
                keyset_hash=ks_hash.hex(),
            )
        if not 0 < block_number <= MAX_BLOCK_NUMBER:
            raise InvalidRegistrationError(
                f"Registration block {block_number} for {ks_hash} is out of range",
                block_number=block_number,
            )

        # A keyset is registered in exactly one block
        events = self._ledger.scan_registration_events(BlockRange.single(block_number), ks_hash)
        async with aclosing(events):
            async for event in events:
                # The log filter may not be exact
                if event.keyset_hash == ks_hash.value:
                    return ResolvedKeyset(
                        keyset_hash=ks_hash,
                        keyset_bytes=event.keyset_bytes,
                        source=KeysetSource.LEDGER,
                        block_number=block_number,
                    )

        raise KeysetNotFoundError(
            f"Keyset {ks_hash} not found on the ledger at block {block_number}",
            keyset_hash=ks_hash.hex(),
        )
