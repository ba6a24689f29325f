import asyncio
from typing import Awaitable
from typing import Callable
from typing import List
from typing import Optional

from sui_rpc_helper.rpc import SuiRpcClient
from sui_rpc_helper.utils.default_logger import default_logger
from sui_rpc_helper.utils.models.data_model import DynamicFieldInfo


logger = default_logger.bind(module='Pagination')

DEFAULT_SLEEP_BETWEEN_REQUESTS = 0.333  # seconds


async def fetch_all_pages(
    fetch_page: Callable[[Optional[str]], Awaitable],
    sleep_between_requests: float = DEFAULT_SLEEP_BETWEEN_REQUESTS,
    verbose: bool = False,
) -> List:
    """
    Drains a cursor-paginated listing and returns every item in page order.

    Pages are requested one after another, pausing ``sleep_between_requests``
    seconds after each page to give the node a break. An error on any page
    propagates and discards whatever was accumulated.

    Args:
        fetch_page: Coroutine function taking a cursor (``None`` for the first
            page) and returning a page with ``data``, ``next_cursor`` and
            ``has_next_page``.
        sleep_between_requests (float, optional): Pause between pages, in seconds.
        verbose (bool, optional): Log each page number as it is fetched.

    Returns:
        list: All items of all pages.
    """
    items = []
    cursor = None
    page_number = 1
    has_next_page = True
    while has_next_page:
        if verbose:
            logger.info('Fetching page {}', page_number)
        page = await fetch_page(cursor)
        items.extend(page.data)
        has_next_page = page.has_next_page
        cursor = page.next_cursor
        page_number += 1
        if sleep_between_requests > 0:
            await asyncio.sleep(sleep_between_requests)
    logger.debug('Fetched {} items in {} pages', len(items), page_number - 1)
    return items


async def fetch_all_dynamic_fields(
    client: SuiRpcClient,
    parent_id: str,
    sleep_between_requests: float = DEFAULT_SLEEP_BETWEEN_REQUESTS,
    verbose: bool = False,
) -> List[DynamicFieldInfo]:
    """
    Get all dynamic object fields owned by an object.
    """
    async def fetch_page(cursor):
        return await client.get_dynamic_fields(parent_id, cursor=cursor)

    return await fetch_all_pages(fetch_page, sleep_between_requests, verbose)
