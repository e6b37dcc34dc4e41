"""API route modules."""

from chainfetch.api.routes.health import router as health_router
from chainfetch.api.routes.keysets import router as keysets_router

__all__ = [
    "health_router",
    "keysets_router",
]
