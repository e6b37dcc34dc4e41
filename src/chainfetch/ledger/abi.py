"""ABI shaping for the SequencerInbox keyset registry."""

from __future__ import annotations

from typing import Any

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError
from eth_utils import (
    decode_hex,
    encode_hex,
    event_signature_to_log_topic,
    function_signature_to_4byte_selector,
)

from chainfetch.core.exceptions import LedgerDecodeError
from chainfetch.core.keyset import KEYSET_HASH_LENGTH, KeysetHash
from chainfetch.core.models import RegistrationEvent

GET_KEYSET_CREATION_BLOCK = "getKeysetCreationBlock(bytes32)"
SET_VALID_KEYSET = "SetValidKeyset(bytes32,bytes)"
NO_SUCH_KEYSET = "NoSuchKeyset(bytes32)"

GET_KEYSET_CREATION_BLOCK_SELECTOR = function_signature_to_4byte_selector(GET_KEYSET_CREATION_BLOCK)
NO_SUCH_KEYSET_SELECTOR = function_signature_to_4byte_selector(NO_SUCH_KEYSET)
SET_VALID_KEYSET_TOPIC = encode_hex(event_signature_to_log_topic(SET_VALID_KEYSET))


def encode_keyset_creation_block_call(ks_hash: KeysetHash) -> str:
    """Calldata for getKeysetCreationBlock(ksHash)."""
    return encode_hex(GET_KEYSET_CREATION_BLOCK_SELECTOR + encode(["bytes32"], [ks_hash.value]))


def decode_uint256(result: Any) -> int:
    """Decode a single uint256 return value."""
    try:
        return decode(["uint256"], decode_hex(result))[0]
    except (DecodingError, TypeError, ValueError) as e:
        raise LedgerDecodeError(f"Cannot decode uint256 from {result!r}") from e


def is_no_such_keyset(revert_data: str | None) -> bool:
    """Whether revert data carries the NoSuchKeyset custom error."""
    if not revert_data:
        return False
    try:
        return decode_hex(revert_data)[:4] == NO_SUCH_KEYSET_SELECTOR
    except ValueError:
        return False


def hash_topic(ks_hash: KeysetHash) -> str:
    """Topic filter value for the indexed keysetHash argument."""
    return encode_hex(ks_hash.value)


def to_quantity(value: int) -> str:
    """Hex-encode an integer as a JSON-RPC quantity."""
    return hex(value)


def decode_registration_log(log: dict[str, Any]) -> RegistrationEvent:
    """Decode a raw SetValidKeyset log object into a RegistrationEvent."""
    try:
        topics = log["topics"]
        if len(topics) < 2 or topics[0].lower() != SET_VALID_KEYSET_TOPIC:
            raise LedgerDecodeError(f"Log is not a SetValidKeyset event: {topics!r}")

        keyset_hash = decode_hex(topics[1])
        if len(keyset_hash) != KEYSET_HASH_LENGTH:
            raise LedgerDecodeError(f"Malformed keysetHash topic: {topics[1]!r}")

        (keyset_bytes,) = decode(["bytes"], decode_hex(log["data"]))
        log_index = log.get("logIndex")

        return RegistrationEvent(
            keyset_hash=keyset_hash,
            keyset_bytes=keyset_bytes,
            block_number=int(log["blockNumber"], 16),
            transaction_hash=log.get("transactionHash"),
            log_index=int(log_index, 16) if log_index is not None else None,
        )
    except LedgerDecodeError:
        raise
    except (KeyError, IndexError, TypeError, ValueError, AttributeError, DecodingError) as e:
        raise LedgerDecodeError(f"Malformed SetValidKeyset log: {e}") from e
