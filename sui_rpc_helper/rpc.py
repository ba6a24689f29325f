import itertools
from typing import Any
from typing import Dict
from typing import List
from typing import Optional

import tenacity
from httpx import AsyncClient
from httpx import AsyncHTTPTransport
from httpx import Limits
from httpx import Timeout
from tenacity import retry
from tenacity import retry_if_exception_type
from tenacity import stop_after_attempt
from tenacity import wait_random_exponential

from sui_rpc_helper.utils.default_logger import default_logger
from sui_rpc_helper.utils.default_logger import enable_debug_logging
from sui_rpc_helper.utils.exceptions import RPCException
from sui_rpc_helper.utils.models.data_model import PaginatedCoins
from sui_rpc_helper.utils.models.data_model import PaginatedDynamicFields
from sui_rpc_helper.utils.models.settings_model import RPCConfigBase


logger = default_logger.bind(module='SuiRpcClient')

DEFAULT_OBJECT_OPTIONS = {
    'showType': True,
    'showOwner': True,
    'showContent': True,
}


class SuiRpcClient(object):
    """
    Async JSON-RPC client bound to a single Sui fullnode endpoint.

    Each instance owns its own HTTP connection pool, so clients created for
    different endpoints share no connection state. Use it as an async
    context manager, or call ``init()`` and ``close()`` explicitly.
    """

    def __init__(self, rpc_url: str, rpc_settings: Optional[RPCConfigBase] = None, debug_mode=False):
        """
        Args:
            rpc_url (str): The fullnode endpoint to talk to.
            rpc_settings (RPCConfigBase, optional): Client settings. Defaults to a
                single attempt per call with a 15 second timeout.
            debug_mode (bool, optional): Send DEBUG/TRACE records to stdout.
        """
        self._rpc_url = rpc_url
        self._rpc_settings = rpc_settings or RPCConfigBase()
        self._debug_mode = debug_mode
        self._logger = logger.bind(rpc_url=rpc_url)
        self._client = None
        self._async_transport = None
        self._request_ids = itertools.count(1)

        if self._debug_mode:
            enable_debug_logging()

    @property
    def rpc_url(self) -> str:
        return self._rpc_url

    async def _init_http_clients(self):
        """
        Initializes the HTTP client for making RPC requests.

        If the client has already been initialized, this function returns immediately.
        """
        if self._client is not None:
            return
        limits = self._rpc_settings.connection_limits
        self._async_transport = AsyncHTTPTransport(
            limits=Limits(
                max_connections=limits.max_connections,
                max_keepalive_connections=limits.max_keepalive_connections,
                keepalive_expiry=limits.keepalive_expiry,
            ),
        )
        self._client = AsyncClient(
            timeout=Timeout(timeout=self._rpc_settings.request_time_out),
            follow_redirects=False,
            transport=self._async_transport,
        )

    async def init(self):
        await self._init_http_clients()
        self._logger.debug('RPC client initialized for {}', self._rpc_url)

    async def close(self):
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            self._async_transport = None

    async def __aenter__(self):
        await self.init()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    def _on_rpc_exception(self, retry_state: tenacity.RetryCallState):
        """
        Logs a failed attempt before tenacity sleeps and tries again.
        """
        self._logger.warning(
            'Found exception while performing RPC {} on {}, attempt {} | exception: {}',
            retry_state.kwargs.get('method'), self._rpc_url,
            retry_state.attempt_number, retry_state.outcome.exception(),
        )

    async def _make_rpc_jsonrpc_call(self, method: str, params: List[Any]):
        """
        Sends one JSON-RPC request and returns its ``result`` member.

        Args:
            method (str): JSON-RPC method name, e.g. ``suix_getAllBalances``.
            params (list): Positional parameters for the method.

        Returns:
            Any: The ``result`` member of the JSON-RPC response.

        Raises:
            RPCException: On transport errors, non-200 responses or a JSON-RPC
                error, once the configured attempts are exhausted.
        """
        @retry(
            reraise=True,
            retry=retry_if_exception_type(RPCException),
            wait=wait_random_exponential(multiplier=1, max=10),
            stop=stop_after_attempt(self._rpc_settings.retry),
            before_sleep=self._on_rpc_exception,
        )
        async def f(method, params):
            await self._init_http_clients()
            rpc_query = {
                'jsonrpc': '2.0',
                'id': next(self._request_ids),
                'method': method,
                'params': params,
            }
            try:
                response = await self._client.post(url=self._rpc_url, json=rpc_query)
            except Exception as e:
                exc = RPCException(
                    request=rpc_query,
                    response=None,
                    underlying_exception=e,
                    extra_info=f'RPC call error | REQUEST: {rpc_query} | Exception: {str(e)}',
                )
                self._logger.trace('Error in making jsonrpc call, error {}', str(exc))
                raise exc

            if response.status_code != 200:
                raise RPCException(
                    request=rpc_query,
                    response=(response.status_code, response.text),
                    underlying_exception=None,
                    extra_info=f'RPC_CALL_ERROR: {response.text}',
                )

            try:
                response_data = response.json()
            except Exception as e:
                exc = RPCException(
                    request=rpc_query,
                    response=(response.status_code, response.text),
                    underlying_exception=e,
                    extra_info=f'RPC_RESPONSE_DECODE_ERROR: {str(e)}',
                )
                self._logger.trace('Error decoding jsonrpc response, error {}', str(exc))
                raise exc

            if not isinstance(response_data, dict) or 'error' in response_data:
                error = response_data.get('error') if isinstance(response_data, dict) else response_data
                raise RPCException(
                    request=rpc_query,
                    response=response_data,
                    underlying_exception=error,
                    extra_info=f'RPC_JSONRPC_CALL_ERROR: {error}',
                )

            return response_data.get('result')

        return await f(method=method, params=params)

    async def get_latest_sui_system_state(self) -> Dict[str, Any]:
        return await self._make_rpc_jsonrpc_call('suix_getLatestSuiSystemState', [])

    async def get_all_balances(self, owner: str) -> List[Dict[str, Any]]:
        return await self._make_rpc_jsonrpc_call('suix_getAllBalances', [owner])

    async def get_all_coins(
        self,
        owner: str,
        cursor: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> PaginatedCoins:
        result = await self._make_rpc_jsonrpc_call('suix_getAllCoins', [owner, cursor, limit])
        return PaginatedCoins.model_validate(result)

    async def get_coins(
        self,
        owner: str,
        coin_type: Optional[str] = None,
        cursor: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> PaginatedCoins:
        """
        Fetches one page of the coins of ``coin_type`` owned by ``owner``.

        Args:
            owner (str): Owner address.
            coin_type (str, optional): Coin type, the node defaults to ``0x2::sui::SUI``.
            cursor (str, optional): Continuation token from a previous page.
            limit (int, optional): Maximum number of coins in the page.

        Returns:
            PaginatedCoins: The page, with ``next_cursor`` and ``has_next_page``.
        """
        result = await self._make_rpc_jsonrpc_call('suix_getCoins', [owner, coin_type, cursor, limit])
        return PaginatedCoins.model_validate(result)

    async def get_object(self, object_id: str, options: Optional[Dict[str, bool]] = None) -> Dict[str, Any]:
        return await self._make_rpc_jsonrpc_call(
            'sui_getObject', [object_id, options if options is not None else DEFAULT_OBJECT_OPTIONS],
        )

    async def get_dynamic_fields(
        self,
        parent_id: str,
        cursor: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> PaginatedDynamicFields:
        result = await self._make_rpc_jsonrpc_call('suix_getDynamicFields', [parent_id, cursor, limit])
        return PaginatedDynamicFields.model_validate(result)

    async def dev_inspect_transaction_block(
        self,
        sender: str,
        tx_bytes: str,
        gas_price: Optional[int] = None,
        epoch: Optional[int] = None,
    ) -> Dict[str, Any]:
        """
        Runs a transaction in dev-inspect mode, without gas checks or effects.

        Args:
            sender (str): Sender address.
            tx_bytes (str): Base64 BCS-encoded ``TransactionKind``.
            gas_price (int, optional): Gas price, the node uses the reference price if omitted.
            epoch (int, optional): Epoch to run in, the current one if omitted.

        Returns:
            dict: The ``DevInspectResults`` with ``effects``, ``results`` and ``error``.
        """
        return await self._make_rpc_jsonrpc_call(
            'sui_devInspectTransactionBlock',
            [sender, tx_bytes, str(gas_price) if gas_price is not None else None, epoch],
        )
