"""FastAPI dependency injection."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request

from chainfetch.resolution.chain_fetch import ChainFetchResolver


async def get_resolver(request: Request) -> ChainFetchResolver:
    """Get the keyset resolver from app state."""
    resolver = getattr(request.app.state, "resolver", None)
    if resolver is None:
        raise HTTPException(status_code=503, detail="Keyset resolver is not initialized")
    return resolver


# Type alias for cleaner dependency injection
Resolver = Annotated[ChainFetchResolver, Depends(get_resolver)]
