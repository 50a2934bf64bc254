"""Tests for the pagination core."""

from unittest.mock import AsyncMock

import pytest

from usage_reports.core import (
    ApiError,
    DetailedResponse,
    OperationPager,
    Pager,
    PagerExhaustedError,
    get_query_param,
)
from usage_reports.usage_reports_v4 import InstancesUsage


def make_fetcher(pages):
    """Build a page fetcher serving ``pages`` as (items, next_token) pairs.

    The returned fetcher records the token of every call in ``calls``.
    """
    calls = []

    async def fetch(token):
        calls.append(token)
        return pages[len(calls) - 1]

    fetch.calls = calls
    return fetch


class TestGetQueryParam:
    """Tests for extracting tokens from next-page links."""

    def test_reads_parameter(self):
        """Test reading a parameter from a relative link."""
        href = "/v1/resource-usage-reports?partner_id=p1&month=2024-01&offset=abc"
        assert get_query_param(href, "offset") == "abc"

    def test_reads_parameter_from_absolute_url(self):
        """Test reading a parameter from an absolute link."""
        href = "https://partner.cloud.ibm.com/v1/resource-usage-reports?offset=xyz&limit=30"
        assert get_query_param(href, "offset") == "xyz"

    def test_decodes_percent_encoding(self):
        """Test that percent-encoded values are decoded."""
        assert get_query_param("/path?offset=a%2Fb%3D", "offset") == "a/b="

    def test_missing_parameter(self):
        """Test that a missing parameter yields None."""
        assert get_query_param("/path?limit=30", "offset") is None

    def test_empty_url(self):
        """Test that an empty or missing link yields None."""
        assert get_query_param(None, "offset") is None
        assert get_query_param("", "offset") is None

    def test_blank_value(self):
        """Test that a blank value is returned as an empty string."""
        assert get_query_param("/path?offset=", "offset") == ""


class TestPager:
    """Tests for the generic pager."""

    @pytest.mark.asyncio
    async def test_single_page(self):
        """Test a result set that fits in one page."""
        fetch = make_fetcher([(["a", "b"], None)])
        pager = Pager(fetch)

        assert pager.has_next() is True
        assert await pager.get_next() == ["a", "b"]
        assert pager.has_next() is False
        assert fetch.calls == [None]

    @pytest.mark.asyncio
    async def test_tokens_are_passed_back(self):
        """Test that each request carries the token of the previous page."""
        fetch = make_fetcher([(["a"], "t1"), (["b"], "t2"), (["c"], None)])
        pager = Pager(fetch)

        pages = []
        while pager.has_next():
            pages.append(await pager.get_next())

        assert pages == [["a"], ["b"], ["c"]]
        assert fetch.calls == [None, "t1", "t2"]
        assert pager.page_count == 3

    @pytest.mark.asyncio
    async def test_exhausted_pager_raises(self):
        """Test that asking for a page after the last one fails."""
        pager = Pager(make_fetcher([([], None)]))
        await pager.get_next()

        with pytest.raises(PagerExhaustedError, match="No more results available"):
            await pager.get_next()

    @pytest.mark.asyncio
    async def test_empty_token_ends_pagination(self):
        """Test that an empty token is treated as no token."""
        fetch = make_fetcher([(["a"], "")])
        pager = Pager(fetch)

        await pager.get_next()

        assert pager.has_next() is False

    @pytest.mark.asyncio
    async def test_empty_page_with_token_continues(self):
        """Test that an empty page does not end pagination while a token is present."""
        fetch = make_fetcher([([], "t1"), (["a"], None)])

        assert await Pager(fetch).get_all() == ["a"]
        assert fetch.calls == [None, "t1"]

    @pytest.mark.asyncio
    async def test_get_all_preserves_order(self):
        """Test that get_all concatenates pages in order."""
        fetch = make_fetcher([([1, 2], "t1"), ([3], "t2"), ([4, 5], None)])

        assert await Pager(fetch).get_all() == [1, 2, 3, 4, 5]

    @pytest.mark.asyncio
    async def test_get_all_after_partial_iteration(self):
        """Test that get_all only returns the remaining pages."""
        pager = Pager(make_fetcher([([1], "t1"), ([2], "t2"), ([3], None)]))

        assert await pager.get_next() == [1]
        assert await pager.get_all() == [2, 3]
        assert await pager.get_all() == []

    @pytest.mark.asyncio
    async def test_async_iteration(self):
        """Test iterating pages with async for."""
        pager = Pager(make_fetcher([(["a"], "t1"), (["b"], None)]))

        pages = [page async for page in pager]

        assert pages == [["a"], ["b"]]
        assert pager.has_next() is False

    @pytest.mark.asyncio
    async def test_failure_leaves_state_unchanged(self):
        """Test that a failed request can be retried from the same page."""
        calls = []
        responses = [(["a"], "t1"), ApiError(500, "boom"), (["b"], None)]

        async def fetch(token):
            calls.append(token)
            response = responses.pop(0)
            if isinstance(response, Exception):
                raise response
            return response

        pager = Pager(fetch)
        assert await pager.get_next() == ["a"]

        with pytest.raises(ApiError):
            await pager.get_next()

        assert pager.has_next() is True
        assert pager.page_count == 1
        assert await pager.get_next() == ["b"]
        assert calls == [None, "t1", "t1"]


class TestOperationPager:
    """Tests for pagers bound to a service operation."""

    def _page(self, offset, *ids):
        data = {"resources": [{"resource_instance_id": i} for i in ids]}
        if offset is not None:
            data["next"] = {"href": f"/usage?_start={offset}", "offset": offset}
        return DetailedResponse(result=InstancesUsage.from_dict(data), status_code=200)

    def _pager(self, operation, **options):
        return OperationPager(
            operation,
            "acct",
            "2024-01",
            cursor_param="start",
            items_field="resources",
            next_token=InstancesUsage.get_next_start,
            options=options,
        )

    @pytest.mark.asyncio
    async def test_passes_arguments_and_cursor(self):
        """Test that every call gets the fixed arguments plus the cursor."""
        operation = AsyncMock(side_effect=[self._page("s1", "i1"), self._page(None, "i2")])
        pager = self._pager(operation, limit=1, names=True)

        items = await pager.get_all()

        assert [i.resource_instance_id for i in items] == ["i1", "i2"]
        first, second = operation.await_args_list
        assert first.args == ("acct", "2024-01")
        assert first.kwargs == {"limit": 1, "names": True, "start": None}
        assert second.kwargs == {"limit": 1, "names": True, "start": "s1"}

    def test_rejects_preset_cursor(self):
        """Test that the cursor cannot be passed as an option."""
        with pytest.raises(ValueError, match="'start' option should not be set"):
            self._pager(AsyncMock(), start="s1")

    @pytest.mark.asyncio
    async def test_options_are_copied(self):
        """Test that later changes to the caller's options do not leak in."""
        operation = AsyncMock(return_value=self._page(None))
        options = {"limit": 5}
        pager = OperationPager(
            operation,
            cursor_param="start",
            items_field="resources",
            next_token=InstancesUsage.get_next_start,
            options=options,
        )
        options["limit"] = 50

        await pager.get_next()

        assert operation.await_args.kwargs["limit"] == 5

    @pytest.mark.asyncio
    async def test_text_result_is_rejected(self):
        """Test that a CSV response cannot be paginated."""
        operation = AsyncMock(return_value=DetailedResponse(result="a,b\n1,2\n", status_code=200))

        with pytest.raises(TypeError, match="JSON response"):
            await self._pager(operation).get_next()
