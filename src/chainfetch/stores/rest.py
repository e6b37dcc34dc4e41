"""REST data-availability client used as an inner keyset store."""

from __future__ import annotations

import base64
import binascii
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, ClassVar

import httpx
from pydantic import BaseModel

from chainfetch.core.exceptions import KeysetNotFoundError, StoreUnavailableError
from chainfetch.core.keyset import KeysetHash

logger = logging.getLogger(__name__)


class RestStoreConfig(BaseModel):
    """Configuration for a REST keyset store."""

    base_url: str
    timeout: float = 10.0


class RestfulKeysetStore:
    """
    Fetches keysets from a data-availability REST server.

    The server answers ``GET /get-by-hash/<0x-hex>`` with
    ``{"data": "<base64 bytes>"}``. Results are returned unverified.
    """

    SOURCE_NAME: ClassVar[str] = "rest"
    GET_BY_HASH_PATH: ClassVar[str] = "/get-by-hash/"

    def __init__(self, config: RestStoreConfig) -> None:
        self.config = config
        self._client: httpx.AsyncClient | None = None

    @asynccontextmanager
    async def _get_client(self) -> AsyncIterator[httpx.AsyncClient]:
        """Get or create HTTP client with proper lifecycle."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.config.base_url,
                timeout=httpx.Timeout(self.config.timeout),
                headers={"User-Agent": "chainfetch/0.1", "Accept": "application/json"},
                follow_redirects=True,
            )

        try:
            yield self._client
        except httpx.HTTPError as e:
            raise StoreUnavailableError(
                message=f"HTTP error: {e}",
                source=self.SOURCE_NAME,
            ) from e

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def keyset_from_hash(self, ks_hash: KeysetHash) -> bytes:
        async with self._get_client() as client:
            response = await client.get(f"{self.GET_BY_HASH_PATH}{ks_hash.hex()}")

        if response.status_code == 404:
            raise KeysetNotFoundError(
                f"Keyset {ks_hash} not found at {self.config.base_url}",
                keyset_hash=ks_hash.hex(),
            )
        if not response.is_success:
            raise StoreUnavailableError(
                message=f"REST store returned HTTP {response.status_code}",
                source=self.SOURCE_NAME,
                status_code=response.status_code,
            )

        try:
            return base64.b64decode(response.json()["data"], validate=True)
        except (ValueError, KeyError, TypeError, binascii.Error) as e:
            raise StoreUnavailableError(
                message=f"Malformed REST store response: {e}",
                source=self.SOURCE_NAME,
                status_code=response.status_code,
            ) from e

    async def __aenter__(self) -> RestfulKeysetStore:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
