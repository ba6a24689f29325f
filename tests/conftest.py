"""
Pytest configuration and shared fixtures for the Sui RPC Helper test suite.
This module provides stub clients, mock HTTP responses and sample RPC
payloads used across the test suite.
"""
import asyncio
from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from sui_rpc_helper.rpc import SuiRpcClient
from sui_rpc_helper.utils.exceptions import RPCException
from sui_rpc_helper.utils.models.data_model import PaginatedCoins
from sui_rpc_helper.utils.models.settings_model import ConnectionLimits, RPCConfigBase


TEST_RPC_URL = "https://fullnode.mainnet.sui.io:443"
TEST_OWNER = "0x1234567890abcdef1234567890abcdef1234567890abcdef1234567890abcdef"
TEST_COIN_TYPE = "0xdba34672e30cb065b1f93e3ab55318768fd6fef66c15942c9f7cb846e2f900e7::usdc::USDC"


class StubSuiClient:
    """
    Stand-in for SuiRpcClient used by latency probe tests.

    Each read method sleeps ``delay`` seconds, then returns ``{}`` or raises
    ``error`` if one is set. Every call is recorded in ``calls``.
    """

    def __init__(self, endpoint: str, delay: float = 0.0, error: Optional[BaseException] = None):
        self.endpoint = endpoint
        self.delay = delay
        self.error = error
        self.calls: List[tuple] = []
        self.initialized = False
        self.closed = False

    async def init(self):
        self.initialized = True

    async def close(self):
        self.closed = True

    async def _respond(self, name, *args):
        self.calls.append((name, args))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return {}

    async def get_latest_sui_system_state(self):
        return await self._respond("get_latest_sui_system_state")

    async def get_all_balances(self, owner):
        return await self._respond("get_all_balances", owner)

    async def get_all_coins(self, owner):
        return await self._respond("get_all_coins", owner)

    async def get_object(self, object_id, options=None):
        return await self._respond("get_object", object_id, options)


class StubClientFactory:
    """Builds StubSuiClient instances from a per-endpoint behaviour table."""

    def __init__(self, behaviours: Optional[Dict[str, Dict[str, Any]]] = None):
        self.behaviours = behaviours or {}
        self.clients: List[StubSuiClient] = []

    def __call__(self, endpoint: str) -> StubSuiClient:
        client = StubSuiClient(endpoint, **self.behaviours.get(endpoint, {}))
        self.clients.append(client)
        return client


def make_coin(object_id: str, balance: int = 100, coin_type: str = TEST_COIN_TYPE) -> Dict[str, Any]:
    """Build a coin object in the wire format returned by suix_getCoins."""
    return {
        "coinType": coin_type,
        "coinObjectId": object_id,
        "version": "1",
        "digest": "9WvmCsSzXR9Xdq5QxKVAXdMYaxCMb6cMnFy3p5C5ZZ7M",
        "balance": str(balance),
        "previousTransaction": "FfDdJGa5xfGmy4cBPN7rmSzZoUFEJCqRoytcFaN4kQVq",
    }


def make_coin_page(object_ids: List[str], has_next_page: bool = False, next_cursor: Optional[str] = None) -> PaginatedCoins:
    return PaginatedCoins.model_validate({
        "data": [make_coin(object_id) for object_id in object_ids],
        "nextCursor": next_cursor,
        "hasNextPage": has_next_page,
    })


@pytest.fixture
def stub_client_factory():
    """Fixture providing a factory of stub clients with no delay and no errors."""
    return StubClientFactory()


@pytest.fixture
def rpc_config() -> RPCConfigBase:
    """Fixture providing a basic RPC configuration for testing."""
    return RPCConfigBase(
        retry=1,
        request_time_out=10,
        connection_limits=ConnectionLimits(
            max_connections=100,
            max_keepalive_connections=50,
            keepalive_expiry=300,
        ),
    )


@pytest.fixture
def mock_async_client() -> AsyncMock:
    """Fixture providing a simple mock HTTP client."""
    mock = AsyncMock(spec=httpx.AsyncClient)

    class MockResponse:
        def __init__(self):
            self.status_code = 200
            self._json_data = {"jsonrpc": "2.0", "id": 1, "result": None}
            self.text = ""

        def json(self):
            """Return json data to match httpx behavior."""
            return self._json_data

        def set_json_data(self, data):
            self._json_data = data

    mock.post = AsyncMock(return_value=MockResponse())
    return mock


@pytest.fixture
def sui_client_instance(rpc_config, mock_async_client):
    """Fixture providing a SuiRpcClient whose HTTP client is mocked."""
    client = SuiRpcClient(TEST_RPC_URL, rpc_config)
    client._client = mock_async_client
    yield client


@pytest.fixture
def mock_httpx_response():
    """Fixture providing mock HTTPX responses."""
    def _create_mock_response(status_code=200, json_data=None, text=None):
        mock_response = MagicMock(spec=httpx.Response)
        mock_response.status_code = status_code
        mock_response.json = MagicMock(return_value=json_data if json_data is not None else {})
        mock_response.text = text or ""
        return mock_response
    return _create_mock_response


@pytest.fixture
def mock_coin_client():
    """Fixture providing a mock client for coin lookups."""
    client = AsyncMock(spec=SuiRpcClient)
    client.get_coins = AsyncMock(return_value=make_coin_page(["0xc1"]))
    return client


@pytest.fixture
def failing_coin_client():
    """Fixture providing a mock client whose coin lookup always fails."""
    client = AsyncMock(spec=SuiRpcClient)
    client.get_coins = AsyncMock(side_effect=RPCException(
        request={"method": "suix_getCoins"},
        response=None,
        underlying_exception=httpx.ConnectError("connection refused"),
        extra_info="RPC call error",
    ))
    return client


@pytest.fixture
def sample_system_state() -> Dict[str, Any]:
    """Fixture providing a trimmed suix_getLatestSuiSystemState result."""
    return {
        "epoch": "512",
        "protocolVersion": "58",
        "systemStateVersion": "2",
        "referenceGasPrice": "750",
        "epochStartTimestampMs": "1727049602463",
        "epochDurationMs": "86400000",
    }


@pytest.fixture
def sample_dynamic_field() -> Dict[str, Any]:
    """Fixture providing a dynamic field entry in wire format."""
    return {
        "name": {"type": "u64", "value": "1"},
        "bcsName": "2",
        "type": "DynamicObject",
        "objectType": "0x2::coin::Coin<0x2::sui::SUI>",
        "objectId": "0x5b8e3a5cbd7f42c1b8c5d73a6b3d5c1e2b3f8f7a0d6c5e4b3a2f1e0d9c8b7a6",
        "version": 42,
        "digest": "8kEG9LcbFwqQxSHHmjq4XH1m3AQJEY9cpUZAvAzvjfYX",
    }
