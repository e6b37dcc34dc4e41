"""Keyset hash value object and hashing helpers."""

from __future__ import annotations

import re
from typing import Any, ClassVar

from eth_utils import keccak
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .exceptions import ValidationError

KEYSET_HASH_LENGTH = 32


def keyset_hash(data: bytes) -> bytes:
    """Compute the Keccak-256 content hash of keyset bytes."""
    return keccak(data)


class KeysetHash(BaseModel):
    """
    A 32-byte Keccak-256 digest identifying a keyset.

    Accepts raw bytes or a hex string, with or without the ``0x`` prefix.
    """

    model_config = ConfigDict(frozen=True)

    value: bytes = Field(..., description="Raw 32-byte digest")

    HEX_PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"^(0x)?[0-9a-fA-F]{64}$")

    @field_validator("value", mode="before")
    @classmethod
    def coerce_value(cls, v: Any) -> bytes:
        """Decode hex strings and check the digest length."""
        if isinstance(v, str):
            if not cls.HEX_PATTERN.match(v.strip()):
                raise ValueError(f"Invalid keyset hash: {v!r}")
            v = bytes.fromhex(v.strip().removeprefix("0x"))
        elif isinstance(v, (bytearray, memoryview)):
            v = bytes(v)
        if not isinstance(v, bytes):
            raise ValueError(f"Keyset hash must be bytes or hex, got {type(v).__name__}")
        if len(v) != KEYSET_HASH_LENGTH:
            raise ValueError(
                f"Keyset hash must be {KEYSET_HASH_LENGTH} bytes, got {len(v)}"
            )
        return v

    @classmethod
    def parse(cls, value: KeysetHash | bytes | str) -> KeysetHash:
        """Parse a hash, raising ValidationError on malformed input."""
        if isinstance(value, KeysetHash):
            return value
        try:
            return cls(value=value)
        except ValueError as e:
            raise ValidationError(str(e), details={"value": repr(value)}) from e

    @classmethod
    def of(cls, data: bytes) -> KeysetHash:
        """Hash keyset bytes."""
        return cls(value=keyset_hash(data))

    def matches(self, data: bytes) -> bool:
        """Whether the given bytes hash to this digest."""
        return keyset_hash(data) == self.value

    def hex(self) -> str:
        """0x-prefixed lowercase hex form."""
        return "0x" + self.value.hex()

    def __bytes__(self) -> bytes:
        return self.value

    def __str__(self) -> str:
        return self.hex()
