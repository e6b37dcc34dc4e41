"""Response schemas for API endpoints."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from chainfetch.api.schemas.base import APIBaseSchema
from chainfetch.core.models import ResolvedKeyset
from chainfetch.core.types import KeysetSource


class KeysetResponse(APIBaseSchema):
    """A resolved keyset."""

    keyset_hash: str = Field(..., description="0x-prefixed Keccak-256 hash")
    keyset_bytes: str = Field(..., description="0x-prefixed keyset payload")
    source: KeysetSource
    block_number: int | None = Field(
        default=None, description="Registration block when served from the ledger"
    )

    @classmethod
    def from_resolved(cls, resolved: ResolvedKeyset) -> KeysetResponse:
        return cls(
            keyset_hash=resolved.keyset_hash.hex(),
            keyset_bytes="0x" + resolved.keyset_bytes.hex(),
            source=resolved.source,
            block_number=resolved.block_number,
        )


class HealthResponse(APIBaseSchema):
    """Health check response."""

    status: Literal["healthy", "degraded", "unhealthy"]
    version: str
    services: dict[str, Literal["up", "down", "unknown"]] = Field(default_factory=dict)
