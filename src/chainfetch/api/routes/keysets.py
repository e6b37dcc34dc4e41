"""Keyset resolution endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from chainfetch.api.dependencies import Resolver
from chainfetch.api.schemas import KeysetResponse
from chainfetch.core.exceptions import (
    InvalidRegistrationError,
    KeysetNotFoundError,
    LedgerError,
    ValidationError,
)
from chainfetch.core.keyset import KeysetHash

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/keysets", tags=["keysets"])


@router.get(
    "/{keyset_hash}",
    response_model=KeysetResponse,
    response_model_by_alias=True,
    operation_id="getKeyset",
    summary="Resolve a keyset by hash",
    description=(
        "Look up a keyset by its Keccak-256 hash. The inner store is tried "
        "first; the ledger registration is used when the store misses or "
        "returns bytes with a different hash."
    ),
)
async def get_keyset(keyset_hash: str, resolver: Resolver) -> KeysetResponse:
    """Resolve a keyset by hash."""
    try:
        ks_hash = KeysetHash.parse(keyset_hash)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message) from e

    try:
        resolved = await resolver.resolve(ks_hash)
    except KeysetNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message) from e
    except InvalidRegistrationError as e:
        logger.error(f"Invalid registration for {ks_hash}: {e.message}")
        raise HTTPException(status_code=502, detail=e.message) from e
    except LedgerError as e:
        logger.warning(f"Ledger lookup failed for {ks_hash}: {e.message}")
        raise HTTPException(status_code=502, detail=f"Ledger unavailable: {e.message}") from e
    except TimeoutError as e:
        raise HTTPException(status_code=504, detail="Keyset resolution timed out") from e

    return KeysetResponse.from_resolved(resolved)
