"""JSON-RPC 2.0 transport for Ethereum-compatible ledger nodes."""

from __future__ import annotations

import itertools
import logging
import math
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, AsyncIterator

import httpx
from pydantic import BaseModel, Field

from chainfetch.core.exceptions import (
    JsonRpcError,
    LedgerDecodeError,
    LedgerTransportError,
    RateLimitError,
)
from chainfetch.ledger.ratelimit import AsyncRateLimiter, RateLimitConfig

logger = logging.getLogger(__name__)


class RpcConfig(BaseModel):
    """Configuration for a JSON-RPC client."""

    url: str
    timeout: float = 30.0
    rate_limit: RateLimitConfig = Field(default_factory=RateLimitConfig)


class JsonRpcClient:
    """
    Minimal async JSON-RPC client.

    Provides:
    - HTTP client management with connection pooling
    - Rate limiting with 429 handling
    - Translation of HTTP and JSON-RPC failures into ledger errors

    Only 429 responses are retried; every other failure is final.
    """

    def __init__(self, config: RpcConfig) -> None:
        self.config = config
        self._client: httpx.AsyncClient | None = None
        self._rate_limiter = AsyncRateLimiter(self.config.rate_limit)
        self._ids = itertools.count(1)

    @property
    def url(self) -> str:
        return self.config.url

    @asynccontextmanager
    async def _get_client(self) -> AsyncIterator[httpx.AsyncClient]:
        """Get or create HTTP client with proper lifecycle."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.config.timeout),
                headers={
                    "User-Agent": "chainfetch/0.1",
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                },
            )

        try:
            yield self._client
        except httpx.HTTPError as e:
            raise LedgerTransportError(f"HTTP error: {e}") from e

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _post(self, payload: dict[str, Any]) -> httpx.Response:
        """POST a payload with pacing and 429 handling."""
        async with self._get_client() as client:
            while True:
                await self._rate_limiter.acquire()
                response = await client.post(self.config.url, json=payload)

                if response.status_code != 429:
                    self._rate_limiter.reset_429_state()
                    return response

                retry_after = parse_retry_after(response.headers.get("Retry-After"))
                if not self._rate_limiter.should_retry_429:
                    raise RateLimitError(
                        message="Ledger node rate limit exceeded",
                        retry_after=retry_after,
                    )
                wait_time = self._rate_limiter.handle_429(retry_after)
                logger.debug(f"Ledger node rate limited, retrying in {wait_time:.1f}s")

    async def request(self, method: str, params: list[Any]) -> Any:
        """
        Call a JSON-RPC method and return its result.

        Raises:
            LedgerTransportError: HTTP failure or non-2xx status
            JsonRpcError: the node returned an error object
            LedgerDecodeError: the response is not a JSON-RPC envelope
        """
        request_id = next(self._ids)
        payload = {"jsonrpc": "2.0", "id": request_id, "method": method, "params": params}

        start = time.monotonic()
        response = await self._post(payload)
        duration_ms = (time.monotonic() - start) * 1000
        logger.debug(f"{method} #{request_id} -> HTTP {response.status_code} in {duration_ms:.0f}ms")

        if not response.is_success:
            raise LedgerTransportError(
                f"Ledger node returned HTTP {response.status_code} for {method}",
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise LedgerDecodeError(f"Invalid JSON in {method} response") from e

        if not isinstance(body, dict):
            raise LedgerDecodeError(f"Unexpected {method} response: {body!r}")

        error = body.get("error")
        if error is not None:
            if not isinstance(error, dict):
                raise JsonRpcError(f"{method} failed: {error!r}")
            raise JsonRpcError(
                f"{method} failed: {error.get('message', 'unknown error')}",
                code=error.get("code"),
                data=_revert_data(error.get("data")),
            )

        if "result" not in body:
            raise LedgerDecodeError(f"Missing result in {method} response")
        return body["result"]

    async def __aenter__(self) -> JsonRpcClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


def _revert_data(data: Any) -> str | None:
    """Normalize the error data field nodes use to carry revert payloads."""
    if isinstance(data, dict):
        data = data.get("data")
    if isinstance(data, str):
        # Some nodes prefix the payload, e.g. "Reverted 0x..."
        index = data.find("0x")
        return data[index:] if index >= 0 else None
    return None


def parse_retry_after(value: str | None) -> float | None:
    """Seconds to wait from a Retry-After header, given as seconds or an HTTP-date."""
    if not value:
        return None
    try:
        seconds = float(value)
    except ValueError:
        pass
    else:
        return max(seconds, 0.0) if math.isfinite(seconds) else None

    try:
        when = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        return None
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    return max((when - datetime.now(timezone.utc)).total_seconds(), 0.0)
