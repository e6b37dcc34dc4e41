"""Tests for the REST keyset store."""

from __future__ import annotations

import base64

import httpx
import pytest
from httpx import Response

from chainfetch.core.exceptions import KeysetNotFoundError, StoreUnavailableError
from chainfetch.core.keyset import KeysetHash
from chainfetch.stores.rest import RestfulKeysetStore, RestStoreConfig


@pytest.fixture
async def rest_store(inner_store_url: str):
    """REST store closed after the test."""
    async with RestfulKeysetStore(RestStoreConfig(base_url=inner_store_url, timeout=5.0)) as store:
        yield store


def by_hash_url(base_url: str, ks_hash: KeysetHash) -> str:
    return f"{base_url}/get-by-hash/{ks_hash.hex()}"


class TestRestfulKeysetStore:
    """Tests for RestfulKeysetStore."""

    async def test_returns_decoded_bytes(
        self,
        respx_mock,
        rest_store: RestfulKeysetStore,
        inner_store_url: str,
        sample_keyset: bytes,
        sample_hash: KeysetHash,
    ):
        """The base64 payload should be decoded."""
        route = respx_mock.get(by_hash_url(inner_store_url, sample_hash)).mock(
            return_value=Response(200, json={"data": base64.b64encode(sample_keyset).decode()})
        )

        assert await rest_store.keyset_from_hash(sample_hash) == sample_keyset
        assert route.called

    async def test_returns_bytes_unverified(
        self,
        respx_mock,
        rest_store: RestfulKeysetStore,
        inner_store_url: str,
        sample_hash: KeysetHash,
    ):
        """The store does not check the payload against the hash."""
        respx_mock.get(by_hash_url(inner_store_url, sample_hash)).mock(
            return_value=Response(200, json={"data": base64.b64encode(b"wrong").decode()})
        )

        assert await rest_store.keyset_from_hash(sample_hash) == b"wrong"

    async def test_not_found(
        self,
        respx_mock,
        rest_store: RestfulKeysetStore,
        inner_store_url: str,
        other_hash: KeysetHash,
    ):
        """404 should raise KeysetNotFoundError."""
        respx_mock.get(by_hash_url(inner_store_url, other_hash)).mock(return_value=Response(404))

        with pytest.raises(KeysetNotFoundError):
            await rest_store.keyset_from_hash(other_hash)

    async def test_server_error(
        self,
        respx_mock,
        rest_store: RestfulKeysetStore,
        inner_store_url: str,
        sample_hash: KeysetHash,
    ):
        """Other error statuses should raise StoreUnavailableError."""
        respx_mock.get(by_hash_url(inner_store_url, sample_hash)).mock(return_value=Response(503))

        with pytest.raises(StoreUnavailableError) as exc_info:
            await rest_store.keyset_from_hash(sample_hash)

        assert exc_info.value.status_code == 503
        assert exc_info.value.source == "rest"

    async def test_connection_error(
        self,
        respx_mock,
        rest_store: RestfulKeysetStore,
        inner_store_url: str,
        sample_hash: KeysetHash,
    ):
        """Network failures should raise StoreUnavailableError."""
        respx_mock.get(by_hash_url(inner_store_url, sample_hash)).mock(
            side_effect=httpx.ConnectError("connection refused")
        )

        with pytest.raises(StoreUnavailableError):
            await rest_store.keyset_from_hash(sample_hash)

    @pytest.mark.parametrize(
        "body",
        [{"data": "not base64!"}, {"payload": "AAAA"}, {"data": 42}],
    )
    async def test_malformed_body(
        self,
        body: dict,
        respx_mock,
        rest_store: RestfulKeysetStore,
        inner_store_url: str,
        sample_hash: KeysetHash,
    ):
        """Bodies that cannot be decoded should raise StoreUnavailableError."""
        respx_mock.get(by_hash_url(inner_store_url, sample_hash)).mock(
            return_value=Response(200, json=body)
        )

        with pytest.raises(StoreUnavailableError):
            await rest_store.keyset_from_hash(sample_hash)
