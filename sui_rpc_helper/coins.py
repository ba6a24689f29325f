from sui_rpc_helper.pagination import fetch_all_pages
from sui_rpc_helper.rpc import SuiRpcClient
from sui_rpc_helper.transactions import TransactionBlock
from sui_rpc_helper.transactions import TransactionResult
from sui_rpc_helper.utils.address import remove_leading_zeros
from sui_rpc_helper.utils.constants import GAS_COIN_TYPE
from sui_rpc_helper.utils.default_logger import default_logger
from sui_rpc_helper.utils.exceptions import InsufficientCoinsError
from sui_rpc_helper.utils.models.data_model import ConsolidationRequest


logger = default_logger.bind(module='Coins')


async def get_coin_of_value(
    client: SuiRpcClient,
    txb: TransactionBlock,
    owner_address: str,
    coin_type: str,
    coin_value: int,
    fetch_all: bool = False,
) -> TransactionResult:
    """
    Get a ``Coin<T>`` of a given value from the owner, merging and splitting as needed.

    SUI is split straight from the gas coin without any lookup. Any other
    coin type is looked up on ``client``; all the coins found are merged into
    the first one and the requested value is split off it. The owner is
    assumed to hold enough balance; a shortfall only shows up when the
    transaction is executed.

    Only the first page of coins is used unless ``fetch_all`` is set.

    Args:
        client (SuiRpcClient): Client used for the coin lookup.
        txb (TransactionBlock): Transaction the commands are appended to.
        owner_address (str): Owner of the coins.
        coin_type (str): Coin type, e.g. ``0x2::sui::SUI``.
        coin_value (int): Value of the coin to produce, in base units.
        fetch_all (bool, optional): Drain every page of coins instead of only the first.

    Returns:
        TransactionResult: The ``SplitCoins`` result, only valid within ``txb``.

    Raises:
        InsufficientCoinsError: If the owner holds no coins of ``coin_type``.
        RPCException: If the coin lookup fails.
    """
    coin_type = remove_leading_zeros(coin_type)
    if coin_type == GAS_COIN_TYPE:
        return txb.split_coins(txb.gas, [txb.pure(coin_value)])

    if fetch_all:
        async def fetch_page(cursor):
            return await client.get_coins(owner_address, coin_type, cursor=cursor)
        coins = await fetch_all_pages(fetch_page, sleep_between_requests=0)
    else:
        paginated_coins = await client.get_coins(owner_address, coin_type)
        if paginated_coins.has_next_page:
            logger.warning(
                '{} holds more than one page of {} coins, only the first page is merged',
                owner_address, coin_type,
            )
        coins = paginated_coins.data

    if not coins:
        raise InsufficientCoinsError(owner_address, coin_type)

    first_coin, other_coins = coins[0], coins[1:]
    first_coin_input = txb.object(first_coin.coin_object_id)
    if other_coins:
        txb.merge_coins(first_coin_input, [coin.coin_object_id for coin in other_coins])
    logger.debug('Merged {} coins of {} for {}', len(coins), coin_type, owner_address)
    return txb.split_coins(first_coin_input, [txb.pure(coin_value)])


async def consolidate(
    request: ConsolidationRequest,
    txb: TransactionBlock,
    client: SuiRpcClient,
    fetch_all: bool = False,
) -> TransactionResult:
    return await get_coin_of_value(
        client, txb, request.owner_address, request.coin_type, request.coin_value, fetch_all=fetch_all,
    )
