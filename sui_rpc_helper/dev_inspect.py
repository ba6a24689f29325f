from typing import Any
from typing import Dict
from typing import List

from sui_rpc_helper.rpc import SuiRpcClient
from sui_rpc_helper.utils.constants import DEV_INSPECT_SENDER
from sui_rpc_helper.utils.default_logger import default_logger
from sui_rpc_helper.utils.exceptions import DevInspectError


logger = default_logger.bind(module='DevInspect')


async def dev_inspect_and_get_results(
    client: SuiRpcClient,
    tx_bytes: str,
    sender: str = DEV_INSPECT_SENDER,
) -> List[Dict[str, Any]]:
    """
    Dev-inspect a transaction and return the per-command execution results.

    Decoding the BCS return values inside each result is left to the caller.

    Args:
        client (SuiRpcClient): Client used for the call.
        tx_bytes (str): Base64 BCS-encoded ``TransactionKind``.
        sender (str, optional): Sender address; it needs no funds.

    Returns:
        list[dict]: The ``results`` member, one entry per command.

    Raises:
        DevInspectError: If the node reports an execution error or no results.
        RPCException: If the RPC call itself fails.
    """
    resp = await client.dev_inspect_transaction_block(sender, tx_bytes)
    if resp.get('error'):
        logger.debug('Dev-inspect reported an error: {}', resp['error'])
        raise DevInspectError('response error', resp)
    if not resp.get('results'):
        raise DevInspectError('response has no results', resp)
    return resp['results']
