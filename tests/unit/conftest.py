"""Unit test fixtures with HTTP and JSON-RPC mocking."""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest
import respx
from eth_abi import encode
from httpx import Response

from chainfetch.core.keyset import KeysetHash
from chainfetch.ledger import abi
from chainfetch.ledger.ratelimit import RateLimitConfig
from chainfetch.ledger.rpc import JsonRpcClient, RpcConfig

# ============================================================================
# HTTP Mocking Fixtures
# ============================================================================


@pytest.fixture
def respx_mock():
    """Provide a respx mock router for HTTP mocking.

    Use this when you need fine-grained control over mocked responses.
    The mock is automatically started and stopped by respx.
    """
    with respx.mock(assert_all_called=False) as router:
        yield router


# ============================================================================
# JSON-RPC Fixtures
# ============================================================================


@pytest.fixture
def rpc_config(rpc_url: str) -> RpcConfig:
    """Create a JSON-RPC config for testing."""
    return RpcConfig(
        url=rpc_url,
        timeout=5.0,
        rate_limit=RateLimitConfig(
            requests_per_second=1000.0,  # High limit for tests
            max_429_retries=2,
        ),
    )


@pytest.fixture
async def rpc_client(rpc_config: RpcConfig):
    """JSON-RPC client closed after the test."""
    client = JsonRpcClient(rpc_config)
    yield client
    await client.close()


def rpc_method(request: httpx.Request) -> str:
    """Method name of a captured JSON-RPC request."""
    return json.loads(request.content)["method"]


def rpc_params(request: httpx.Request) -> list[Any]:
    """Params of a captured JSON-RPC request."""
    return json.loads(request.content)["params"]


def rpc_result(request: httpx.Request, result: Any) -> Response:
    """JSON-RPC success envelope echoing the request id."""
    request_id = json.loads(request.content)["id"]
    return Response(200, json={"jsonrpc": "2.0", "id": request_id, "result": result})


def rpc_error(
    request: httpx.Request,
    code: int,
    message: str,
    data: Any = None,
) -> Response:
    """JSON-RPC error envelope echoing the request id."""
    request_id = json.loads(request.content)["id"]
    error: dict[str, Any] = {"code": code, "message": message}
    if data is not None:
        error["data"] = data
    return Response(200, json={"jsonrpc": "2.0", "id": request_id, "error": error})


@pytest.fixture
def jsonrpc() -> dict[str, Callable[..., Any]]:
    """Helpers for building and inspecting JSON-RPC traffic."""
    return {
        "method": rpc_method,
        "params": rpc_params,
        "result": rpc_result,
        "error": rpc_error,
    }


# ============================================================================
# Ledger Data Helpers
# ============================================================================


def uint256_result(value: int) -> str:
    """ABI-encoded uint256 as returned by eth_call."""
    return "0x" + encode(["uint256"], [value]).hex()


def no_such_keyset_revert(ks_hash: KeysetHash) -> str:
    """Revert payload of the NoSuchKeyset(bytes32) custom error."""
    return "0x" + (abi.NO_SUCH_KEYSET_SELECTOR + encode(["bytes32"], [ks_hash.value])).hex()


def set_valid_keyset_log(
    keyset_hash: bytes,
    keyset_bytes: bytes,
    block_number: int,
    address: str,
    log_index: int = 0,
) -> dict[str, Any]:
    """Raw eth_getLogs entry for a SetValidKeyset event."""
    return {
        "address": address,
        "topics": [abi.SET_VALID_KEYSET_TOPIC, "0x" + keyset_hash.hex()],
        "data": "0x" + encode(["bytes"], [keyset_bytes]).hex(),
        "blockNumber": hex(block_number),
        "transactionHash": "0x" + "ab" * 32,
        "transactionIndex": "0x0",
        "blockHash": "0x" + "cd" * 32,
        "logIndex": hex(log_index),
        "removed": False,
    }


@pytest.fixture
def ledger_data() -> dict[str, Callable[..., Any]]:
    """Helpers for building encoded ledger responses."""
    return {
        "uint256": uint256_result,
        "no_such_keyset": no_such_keyset_revert,
        "log": set_valid_keyset_log,
    }
