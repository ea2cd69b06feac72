"""Search API wrappers for the Notion API.

Search returns pages and databases in one listing; each result is decoded
by its own ``object`` field, independent of its position.
"""

from __future__ import annotations

from typing import Any

from typednotion.decoder import Decoder
from typednotion.objects import PageOrDatabase, PaginatedList, Sort

from .transport import AsyncNotionTransport, NotionTransport


def _search_body(
    query: str,
    sort: Sort | None,
    filter: dict[str, Any] | None,
    start_cursor: str | None,
    page_size: int | None,
) -> dict[str, Any]:
    body: dict[str, Any] = {}
    if query:
        body["query"] = query
    if sort is not None:
        body["sort"] = sort.to_dict()
    if filter is not None:
        body["filter"] = filter
    if start_cursor:
        body["start_cursor"] = start_cursor
    if page_size is not None:
        body["page_size"] = page_size
    return body


class SearchAPI:
    """Synchronous wrapper for the Notion Search API.

    Parameters
    ----------
    transport:
        A configured :class:`NotionTransport` instance.
    decoder:
        The :class:`Decoder` used to type the responses.
    """

    def __init__(self, transport: NotionTransport, decoder: Decoder) -> None:
        self._transport = transport
        self._decoder = decoder

    def search(
        self,
        query: str = "",
        sort: Sort | None = None,
        filter: dict[str, Any] | None = None,
        start_cursor: str | None = None,
        page_size: int | None = None,
        *,
        timeout: float | None = None,
    ) -> PaginatedList[PageOrDatabase]:
        """Search page and database titles.

        Parameters
        ----------
        query:
            Text to match against titles.  Empty returns everything shared
            with the integration.
        sort:
            Order by last edit time.
        filter:
            A Notion search filter, e.g.
            ``{"property": "object", "value": "page"}``.
        start_cursor:
            ``next_cursor`` of the previous page of results.
        page_size:
            Maximum number of results (Notion caps it at 100).
        """
        body = _search_body(query, sort, filter, start_cursor, page_size)
        data = self._transport.request("POST", "/search", json=body, timeout=timeout)
        return self._decoder.paginated(data, self._decoder.object)


class AsyncSearchAPI:
    """Asynchronous wrapper for the Notion Search API.

    Mirrors :class:`SearchAPI` with ``async`` methods.
    """

    def __init__(self, transport: AsyncNotionTransport, decoder: Decoder) -> None:
        self._transport = transport
        self._decoder = decoder

    async def search(
        self,
        query: str = "",
        sort: Sort | None = None,
        filter: dict[str, Any] | None = None,
        start_cursor: str | None = None,
        page_size: int | None = None,
        *,
        timeout: float | None = None,
    ) -> PaginatedList[PageOrDatabase]:
        """See :meth:`SearchAPI.search`."""
        body = _search_body(query, sort, filter, start_cursor, page_size)
        data = await self._transport.request("POST", "/search", json=body, timeout=timeout)
        return self._decoder.paginated(data, self._decoder.object)
