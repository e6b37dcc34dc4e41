"""API schema definitions."""

from chainfetch.api.schemas.base import APIBaseSchema
from chainfetch.api.schemas.responses import HealthResponse, KeysetResponse

__all__ = [
    "APIBaseSchema",
    "HealthResponse",
    "KeysetResponse",
]
