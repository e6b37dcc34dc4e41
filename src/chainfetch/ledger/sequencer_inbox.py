"""Ledger client for the SequencerInbox keyset registry."""

from __future__ import annotations

import logging
from typing import AsyncGenerator

from eth_utils import to_checksum_address

from chainfetch.core.exceptions import (
    JsonRpcError,
    KeysetNotRegisteredError,
    LedgerDecodeError,
    ValidationError,
)
from chainfetch.core.keyset import KeysetHash
from chainfetch.core.models import BlockRange, RegistrationEvent
from chainfetch.core.types import BlockTag
from chainfetch.ledger import abi
from chainfetch.ledger.base import LedgerClient
from chainfetch.ledger.rpc import JsonRpcClient

logger = logging.getLogger(__name__)


class SequencerInboxClient(LedgerClient):
    """
    Reads keyset registrations from a SequencerInbox contract over JSON-RPC.

    Point lookups go through ``eth_call`` to ``getKeysetCreationBlock``;
    event scans use ``eth_getLogs`` filtered on the ``SetValidKeyset`` topic
    and the indexed keyset hash.
    """

    DEFAULT_MAX_BLOCKS_PER_QUERY = 1000

    def __init__(
        self,
        rpc: JsonRpcClient,
        address: str,
        *,
        block_tag: BlockTag = BlockTag.LATEST,
        max_blocks_per_query: int = DEFAULT_MAX_BLOCKS_PER_QUERY,
    ) -> None:
        try:
            self._address = to_checksum_address(address)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Invalid SequencerInbox address: {address!r}") from e
        if max_blocks_per_query < 1:
            raise ValidationError("max_blocks_per_query must be at least 1")

        self._rpc = rpc
        self._block_tag = block_tag
        self._max_blocks_per_query = max_blocks_per_query

    @property
    def address(self) -> str:
        return self._address

    async def registration_block_of(self, ks_hash: KeysetHash) -> int:
        call = {"to": self._address, "data": abi.encode_keyset_creation_block_call(ks_hash)}
        try:
            result = await self._rpc.request("eth_call", [call, self._block_tag.value])
        except JsonRpcError as e:
            if abi.is_no_such_keyset(e.data):
                raise KeysetNotRegisteredError(
                    f"No keyset registered for {ks_hash}",
                    keyset_hash=ks_hash.hex(),
                ) from e
            raise
        return abi.decode_uint256(result)

    async def scan_registration_events(
        self,
        block_range: BlockRange,
        ks_hash: KeysetHash,
    ) -> AsyncGenerator[RegistrationEvent, None]:
        topics = [abi.SET_VALID_KEYSET_TOPIC, abi.hash_topic(ks_hash)]

        for chunk in block_range.split(self._max_blocks_per_query):
            logs = await self._rpc.request(
                "eth_getLogs",
                [
                    {
                        "address": self._address,
                        "fromBlock": abi.to_quantity(chunk.start),
                        "toBlock": abi.to_quantity(chunk.end),
                        "topics": topics,
                    }
                ],
            )
            if not isinstance(logs, list):
                raise LedgerDecodeError(f"eth_getLogs returned {type(logs).__name__}, expected list")

            logger.debug(f"{len(logs)} SetValidKeyset logs in blocks {chunk.start}-{chunk.end}")
            for log in logs:
                yield abi.decode_registration_log(log)

    async def close(self) -> None:
        await self._rpc.close()
