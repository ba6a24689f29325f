"""
Unit tests for draining cursor-paginated listings.
"""
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest

from sui_rpc_helper.pagination import fetch_all_dynamic_fields
from sui_rpc_helper.pagination import fetch_all_pages
from sui_rpc_helper.utils.exceptions import RPCException
from sui_rpc_helper.utils.models.data_model import DynamicFieldInfo
from sui_rpc_helper.utils.models.data_model import PaginatedDynamicFields


def _page(items, next_cursor=None, has_next_page=False):
    return SimpleNamespace(data=items, next_cursor=next_cursor, has_next_page=has_next_page)


class TestFetchAllPages:
    """Test cases for the generic pagination loop."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_pages_are_concatenated_in_order(self):
        """Test that pages of sizes 2, 2, 1 give 5 items in order."""
        fetch_page = AsyncMock(side_effect=[
            _page([1, 2], "c1", True),
            _page([3, 4], "c2", True),
            _page([5], None, False),
        ])

        items = await fetch_all_pages(fetch_page, sleep_between_requests=0)

        assert items == [1, 2, 3, 4, 5]
        assert [call.args for call in fetch_page.await_args_list] == [(None,), ("c1",), ("c2",)]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_stops_when_no_next_page(self):
        """Test that a single page without a next page ends the loop."""
        fetch_page = AsyncMock(side_effect=[_page(["a"], "ignored", False)])

        items = await fetch_all_pages(fetch_page, sleep_between_requests=0)

        assert items == ["a"]
        fetch_page.assert_awaited_once_with(None)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_sleeps_between_pages(self):
        """Test that the configured pause is applied after every page."""
        fetch_page = AsyncMock(side_effect=[_page([1], "c1", True), _page([2], None, False)])

        with patch("sui_rpc_helper.pagination.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
            await fetch_all_pages(fetch_page, sleep_between_requests=0.25)

        assert mock_sleep.await_count == 2
        mock_sleep.assert_awaited_with(0.25)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_no_sleep_when_disabled(self):
        """Test that a zero pause never sleeps."""
        fetch_page = AsyncMock(side_effect=[_page([1], "c1", True), _page([2], None, False)])

        with patch("sui_rpc_helper.pagination.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
            await fetch_all_pages(fetch_page, sleep_between_requests=0)

        mock_sleep.assert_not_awaited()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_page_error_propagates(self):
        """Test that an error on a later page aborts the whole fetch."""
        error = RPCException(request=None, response=None, underlying_exception=None, extra_info="boom")
        fetch_page = AsyncMock(side_effect=[_page([1], "c1", True), error])

        with pytest.raises(RPCException):
            await fetch_all_pages(fetch_page, sleep_between_requests=0)
        assert fetch_page.await_count == 2


class TestFetchAllDynamicFields:
    """Test cases for listing every dynamic field of an object."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_fetches_every_page(self, sample_dynamic_field):
        """Test that dynamic fields of all pages are returned as models."""
        client = AsyncMock()
        client.get_dynamic_fields = AsyncMock(side_effect=[
            PaginatedDynamicFields.model_validate(
                {"data": [sample_dynamic_field], "nextCursor": "0xcur", "hasNextPage": True},
            ),
            PaginatedDynamicFields.model_validate(
                {"data": [sample_dynamic_field], "nextCursor": None, "hasNextPage": False},
            ),
        ])

        fields = await fetch_all_dynamic_fields(client, "0xparent", sleep_between_requests=0)

        assert len(fields) == 2
        assert all(isinstance(field, DynamicFieldInfo) for field in fields)
        assert fields[0].object_type == "0x2::coin::Coin<0x2::sui::SUI>"
        assert client.get_dynamic_fields.await_args_list[1].args == ("0xparent",)
        assert client.get_dynamic_fields.await_args_list[1].kwargs == {"cursor": "0xcur"}
