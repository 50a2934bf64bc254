"""Cursor pagination over paged service operations.

A paged operation returns a page of items plus an opaque continuation
token. The token is passed back unmodified on the next call, and an empty
or missing token marks the last page::

    start = None
    while True:
        response = await service.get_resource_usage_account(account_id, month, start=start)
        items.extend(response.result.resources or [])
        start = response.result.get_next_start()
        if start is None:
            break

:class:`Pager` wraps that loop.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any, Generic, TypeVar
from urllib.parse import parse_qs, urlsplit

from usage_reports.core.errors import PagerExhaustedError

logger = logging.getLogger(__name__)

T = TypeVar("T")

PageFetcher = Callable[[str | None], Awaitable[tuple[list[T], str | None]]]


def get_query_param(url: str | None, name: str) -> str | None:
    """Return the first value of query parameter ``name`` in ``url``.

    Raises:
        ValueError: If ``url`` cannot be parsed.
    """
    if not url:
        return None
    query = urlsplit(url).query
    values = parse_qs(query, keep_blank_values=True).get(name)
    return values[0] if values else None


class Pager(Generic[T]):
    """Iterates the pages of a paged operation.

    ``fetch_page`` receives the current token (``None`` for the first page)
    and returns the page items and the next token. Once a page comes back
    without a token the pager is exhausted and cannot be reused; create a
    new pager to start over.

    A failed request leaves the pager at the page it was fetching, so the
    exception propagates and items returned earlier stay with the caller.
    """

    def __init__(self, fetch_page: PageFetcher[T]) -> None:
        self._fetch_page = fetch_page
        self._has_next = True
        self._next_token: str | None = None
        self.page_count = 0

    def has_next(self) -> bool:
        """Return True until the last page has been returned."""
        return self._has_next

    async def get_next(self) -> list[T]:
        """Fetch the next page.

        Raises:
            PagerExhaustedError: If the last page was already returned.
        """
        if not self._has_next:
            raise PagerExhaustedError("No more results available")

        items, next_token = await self._fetch_page(self._next_token)

        self._next_token = next_token or None
        self._has_next = self._next_token is not None
        self.page_count += 1
        logger.debug(
            "Fetched page %d with %d item(s), more pages: %s",
            self.page_count,
            len(items),
            self._has_next,
        )
        return items

    async def get_all(self) -> list[T]:
        """Fetch all remaining pages and concatenate them in page order."""
        results: list[T] = []
        while self.has_next():
            results.extend(await self.get_next())
        return results

    def __aiter__(self) -> Pager[T]:
        return self

    async def __anext__(self) -> list[T]:
        if not self._has_next:
            raise StopAsyncIteration
        return await self.get_next()


class OperationPager(Pager[T]):
    """Pager over a service operation that takes its cursor as a keyword.

    Args:
        operation: Bound service method returning a DetailedResponse whose
            result is the page model.
        args: Positional arguments of every call.
        options: Keyword arguments of every call. They are copied, and must
            not contain the cursor.
        cursor_param: Name of the keyword carrying the token.
        items_field: Attribute of the page model holding the items.
        next_token: Extracts the next token from the page model.
    """

    def __init__(
        self,
        operation: Callable[..., Awaitable[Any]],
        *args: Any,
        cursor_param: str,
        items_field: str,
        next_token: Callable[[Any], str | None],
        options: dict[str, Any] | None = None,
    ) -> None:
        options = dict(options or {})
        if options.get(cursor_param) is not None:
            raise ValueError(f"the '{cursor_param}' option should not be set")
        options.pop(cursor_param, None)

        self._operation = operation
        self._args = args
        self._options = options
        self._cursor_param = cursor_param
        self._items_field = items_field
        self._next_token_of = next_token
        super().__init__(self._fetch)

    async def _fetch(self, token: str | None) -> tuple[list[T], str | None]:
        response = await self._operation(*self._args, **{**self._options, self._cursor_param: token})
        page = response.result
        if page is None or isinstance(page, str):
            raise TypeError("pagination requires a JSON response")
        items = getattr(page, self._items_field, None) or []
        return list(items), self._next_token_of(page)
