"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from chainfetch import __version__
from chainfetch.api.routes import health_router, keysets_router
from chainfetch.config import ChainFetchSettings, configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan manager.

    Handles startup and shutdown of resources.
    """
    from chainfetch.client import ChainFetchClient

    settings = ChainFetchSettings()
    configure_logging(settings)

    logger.info("Initializing keyset resolver...")
    async with ChainFetchClient(settings) as client:
        app.state.resolver = client.resolver
        app.state.rpc_client = client.rpc
        app.state.cache_client = client.cache

        logger.info("Application startup complete")

        yield

        logger.info("Shutting down application...")
        app.state.resolver = None

    logger.info("Application shutdown complete")


def create_app(
    *,
    title: str = "chainfetch API",
    description: str = "Keyset resolution with ledger fallback",
    version: str = __version__,
    use_lifespan: bool = True,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        title: API title for OpenAPI docs
        description: API description for OpenAPI docs
        version: API version
        use_lifespan: Build resources from settings on startup. Disable to
                      inject them through ``app.state`` instead.

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title=title,
        description=description,
        version=version,
        lifespan=lifespan if use_lifespan else None,
        openapi_url="/api/openapi.json",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.include_router(health_router, prefix="/api/v1")
    app.include_router(keysets_router, prefix="/api/v1")

    return app


# For uvicorn direct execution
app = create_app()
