"""Health check endpoints."""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Request

from chainfetch import __version__
from chainfetch.api.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    operation_id="getHealth",
    summary="Health check",
    description="Check the health status of the API and its dependencies.",
)
async def health_check(request: Request) -> HealthResponse:
    """Check API health status."""
    services: dict[str, Literal["up", "down", "unknown"]] = {}
    overall_status: Literal["healthy", "degraded", "unhealthy"] = "healthy"

    # Check ledger node
    rpc = getattr(request.app.state, "rpc_client", None)
    if rpc is None:
        services["ledger"] = "unknown"
    else:
        try:
            await rpc.request("eth_blockNumber", [])
            services["ledger"] = "up"
        except Exception:
            services["ledger"] = "down"
            overall_status = "unhealthy"

    # Check Redis
    cache_client = getattr(request.app.state, "cache_client", None)
    if cache_client is None:
        services["redis"] = "unknown"
    else:
        try:
            await cache_client.ping()
            services["redis"] = "up"
        except Exception:
            services["redis"] = "down"
            if overall_status == "healthy":
                overall_status = "degraded"

    return HealthResponse(
        status=overall_status,
        version=__version__,
        services=services,
    )


@router.get(
    "/ready",
    operation_id="getReady",
    summary="Readiness check",
    description="Check if the API is ready to serve traffic.",
)
async def readiness_check(request: Request) -> dict[str, bool]:
    """Check if API is ready to serve traffic."""
    return {"ready": getattr(request.app.state, "resolver", None) is not None}
