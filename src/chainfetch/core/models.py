"""Domain models for keyset resolution."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from pydantic import BaseModel, ConfigDict, Field

from .keyset import KeysetHash
from .types import KeysetSource

# Block numbers are uint64 on the ledger side.
MAX_BLOCK_NUMBER = 2**64 - 1


@dataclass(frozen=True)
class BlockRange:
    """Inclusive range of ledger blocks."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < 0:
            raise ValueError(f"Block numbers must be non-negative: {self}")
        if self.start > self.end:
            raise ValueError(f"Block range start {self.start} is after end {self.end}")

    @classmethod
    def single(cls, block_number: int) -> BlockRange:
        """Range covering exactly one block."""
        return cls(block_number, block_number)

    def __len__(self) -> int:
        return self.end - self.start + 1

    def split(self, max_blocks: int) -> Iterator[BlockRange]:
        """Lazily yield consecutive sub-ranges of at most max_blocks blocks."""
        if max_blocks < 1:
            raise ValueError("max_blocks must be at least 1")
        return self._chunks(max_blocks)

    def _chunks(self, max_blocks: int) -> Iterator[BlockRange]:
        start = self.start
        while start <= self.end:
            end = min(start + max_blocks - 1, self.end)
            yield BlockRange(start, end)
            start = end + 1


class RegistrationEvent(BaseModel):
    """A SetValidKeyset log decoded from the ledger."""

    model_config = ConfigDict(frozen=True)

    keyset_hash: bytes = Field(..., description="Hash carried in the indexed topic")
    keyset_bytes: bytes = Field(..., description="Registered keyset payload")
    block_number: int = Field(..., ge=0, description="Block containing the log")
    transaction_hash: str | None = Field(default=None, description="Emitting transaction")
    log_index: int | None = Field(default=None, description="Log position within the block")


class ResolvedKeyset(BaseModel):
    """A keyset together with where it was found."""

    model_config = ConfigDict(frozen=True)

    keyset_hash: KeysetHash
    keyset_bytes: bytes
    source: KeysetSource
    block_number: int | None = Field(
        default=None, description="Registration block when resolved from the ledger"
    )
