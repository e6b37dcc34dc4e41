"""Application configuration using Pydantic Settings."""

import logging
from functools import lru_cache

from pydantic import Field, RedisDsn
from pydantic_settings import BaseSettings, SettingsConfigDict


class ChainFetchSettings(BaseSettings):
    """Application configuration from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="CHAINFETCH_",
    )

    # Ledger
    l1_url: str = Field(
        default="http://localhost:8545",
        description="JSON-RPC endpoint of the ledger node",
    )
    sequencer_inbox_address: str | None = Field(
        default=None,
        description="Address of the SequencerInbox contract holding keyset registrations",
    )
    max_blocks_per_query: int = Field(
        default=1000,
        ge=1,
        description="Largest block span requested in a single eth_getLogs call",
    )
    rpc_requests_per_second: float = Field(
        default=25.0,
        gt=0.0,
        description="Client-side rate limit for ledger requests",
    )
    rpc_max_429_retries: int = Field(
        default=3,
        ge=0,
        description="Retries after HTTP 429 from the ledger node, 0 to fail immediately",
    )
    rpc_max_backoff: float = Field(
        default=60.0,
        ge=0.0,
        description="Longest pause after HTTP 429 in seconds",
    )

    # Inner store
    inner_store_url: str | None = Field(
        default=None,
        description="REST data-availability server used for the fast path (optional)",
    )

    # Redis
    redis_url: RedisDsn | None = Field(
        default=None,
        description="Redis connection URL (optional)",
    )
    cache_ttl: int = Field(
        default=3600,
        description="Keyset cache TTL in seconds",
    )

    # Timeouts
    request_timeout: float = Field(
        default=30.0,
        gt=0.0,
        description="Timeout for individual HTTP requests in seconds",
    )
    resolve_timeout: float | None = Field(
        default=None,
        gt=0.0,
        description="Deadline for a whole keyset resolution in seconds",
    )

    # App settings
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )


@lru_cache
def get_settings() -> ChainFetchSettings:
    """Get cached settings instance."""
    return ChainFetchSettings()


def configure_logging(settings: ChainFetchSettings) -> None:
    """Apply the configured log level to the root logger."""
    level = "DEBUG" if settings.debug else settings.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
