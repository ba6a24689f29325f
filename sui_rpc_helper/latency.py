"""
Concurrent latency probing of Sui RPC endpoints.

Every endpoint gets its own client and issues exactly one read-only call.
Failures are captured per endpoint as data, so a batch always returns one
result per endpoint, fastest first and failures last.
"""
import asyncio
import math
import time
from functools import partial
from typing import Callable
from typing import Dict
from typing import List
from typing import Optional

from sui_rpc_helper.rpc import SuiRpcClient
from sui_rpc_helper.utils.constants import DEFAULT_PROBE_OWNER
from sui_rpc_helper.utils.constants import RPC_ENDPOINTS
from sui_rpc_helper.utils.constants import SUI_FRAMEWORK_ADDRESS
from sui_rpc_helper.utils.default_logger import default_logger
from sui_rpc_helper.utils.models.data_model import ProbeKind
from sui_rpc_helper.utils.models.data_model import ProbeRequest
from sui_rpc_helper.utils.models.data_model import ProbeResult
from sui_rpc_helper.utils.models.settings_model import ProbeSettings


logger = default_logger.bind(module='Latency')

ClientFactory = Callable[[str], SuiRpcClient]

# Target used when a probe request doesn't name one
DEFAULT_PROBE_TARGETS: Dict[ProbeKind, Optional[str]] = {
    ProbeKind.SYSTEM_STATE: None,
    ProbeKind.ALL_BALANCES: DEFAULT_PROBE_OWNER,
    ProbeKind.ALL_COINS: DEFAULT_PROBE_OWNER,
    ProbeKind.GET_OBJECT: SUI_FRAMEWORK_ADDRESS,
}


def resolve_probe_target(probe_kind: ProbeKind, target: Optional[str] = None) -> Optional[str]:
    """
    Returns the address or object id a probe of ``probe_kind`` should query.

    SYSTEM_STATE takes no parameter and always resolves to ``None``.
    """
    if probe_kind == ProbeKind.SYSTEM_STATE:
        return None
    if target is not None:
        return target
    return DEFAULT_PROBE_TARGETS[probe_kind]


def sort_probe_results(results: List[ProbeResult]) -> List[ProbeResult]:
    """
    Sorts results by ascending latency with every failure after every success.

    The sort is stable, so failures keep their relative order.
    """
    return sorted(results, key=lambda result: result.latency if result.succeeded else math.inf)


def _error_message(exc: BaseException) -> str:
    return str(exc) or exc.__class__.__name__


async def _issue_probe_call(client: SuiRpcClient, probe_kind: ProbeKind, target: Optional[str]):
    if probe_kind == ProbeKind.SYSTEM_STATE:
        return await client.get_latest_sui_system_state()
    elif probe_kind == ProbeKind.ALL_BALANCES:
        return await client.get_all_balances(target)
    elif probe_kind == ProbeKind.ALL_COINS:
        return await client.get_all_coins(target)
    elif probe_kind == ProbeKind.GET_OBJECT:
        return await client.get_object(target, options={})
    raise ValueError(f'Unsupported probe kind: {probe_kind}')


async def _probe_endpoint(
    endpoint: str,
    probe_kind: ProbeKind,
    target: Optional[str],
    timeout: Optional[float],
    client_factory: ClientFactory,
) -> ProbeResult:
    client = None
    try:
        client = client_factory(endpoint)
        await client.init()
        start_time = time.perf_counter()
        call = _issue_probe_call(client, probe_kind, target)
        if timeout is not None:
            task = asyncio.ensure_future(call)
            done, _ = await asyncio.wait({task}, timeout=timeout)
            if not done:
                task.cancel()
                await asyncio.wait({task})
                message = f'Timed out after {timeout} seconds'
                logger.debug('{} failed {}: {}', endpoint, probe_kind.value, message)
                return ProbeResult(endpoint=endpoint, error=message)
            # re-raises whatever the call itself raised
            task.result()
        else:
            await call
        latency = (time.perf_counter() - start_time) * 1000
        logger.debug('{} answered {} in {:.1f} ms', endpoint, probe_kind.value, latency)
        return ProbeResult(endpoint=endpoint, latency=latency)
    except Exception as e:
        message = _error_message(e)
        logger.debug('{} failed {}: {}', endpoint, probe_kind.value, message)
        return ProbeResult(endpoint=endpoint, error=message)
    finally:
        if client is not None:
            try:
                await client.close()
            except Exception as e:
                logger.warning('Error closing client for {}: {}', endpoint, e)


async def probe(
    request: ProbeRequest,
    client_factory: Optional[ClientFactory] = None,
    settings: Optional[ProbeSettings] = None,
) -> List[ProbeResult]:
    """
    Measures the latency of every endpoint in ``request`` concurrently.

    All probes are launched at once and awaited together; one endpoint failing
    never affects another. A failed endpoint is reported with its error message
    instead of a latency.

    Args:
        request (ProbeRequest): Endpoints, probe kind, optional target and timeout.
        client_factory (Callable, optional): Builds a fresh client for an endpoint.
            Defaults to ``SuiRpcClient`` configured from ``settings``.
        settings (ProbeSettings, optional): Client settings and the fallback timeout.

    Returns:
        list[ProbeResult]: One result per endpoint, ascending latency, failures last.
    """
    settings = settings or ProbeSettings()
    if client_factory is None:
        client_factory = partial(SuiRpcClient, rpc_settings=settings.rpc)
    timeout = request.timeout if request.timeout is not None else settings.timeout
    target = resolve_probe_target(request.probe_kind, request.target)

    outcomes = await asyncio.gather(
        *[
            _probe_endpoint(endpoint, request.probe_kind, target, timeout, client_factory)
            for endpoint in request.endpoints
        ],
        return_exceptions=True,
    )

    results = []
    for endpoint, outcome in zip(request.endpoints, outcomes):
        if isinstance(outcome, BaseException):
            # only reachable if a probe escapes its own error handling
            logger.error('Probe of {} raised: {}', endpoint, outcome)
            outcome = ProbeResult(endpoint=endpoint, error=_error_message(outcome))
        results.append(outcome)

    results = sort_probe_results(results)
    logger.info(
        'Probed {} endpoints with {}: {} ok, {} failed',
        len(results), request.probe_kind.value,
        sum(1 for result in results if result.succeeded),
        sum(1 for result in results if not result.succeeded),
    )
    return results


async def measure_rpc_latency(
    endpoints: Optional[List[str]] = None,
    probe_kind: Optional[ProbeKind] = None,
    target: Optional[str] = None,
    timeout: Optional[float] = None,
    network: str = 'mainnet',
    client_factory: Optional[ClientFactory] = None,
    settings: Optional[ProbeSettings] = None,
) -> List[ProbeResult]:
    """
    Keyword front end to ``probe``.

    Probes the public endpoints of ``network`` when ``endpoints`` is not given,
    and falls back to ``settings.probe_kind`` when ``probe_kind`` is not given.
    """
    settings = settings or ProbeSettings()
    if endpoints is None:
        endpoints = RPC_ENDPOINTS[network]
    request = ProbeRequest(
        endpoints=endpoints,
        probe_kind=probe_kind or settings.probe_kind,
        target=target,
        timeout=timeout,
    )
    return await probe(request, client_factory=client_factory, settings=settings)
