"""Database API wrappers for the Notion API.

:class:`DatabaseAPI` and :class:`AsyncDatabaseAPI` cover ``/databases``.
Query results may mix pages and databases, each decoded by its own
``object`` field.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from typednotion.decoder import Decoder
from typednotion.objects import Database, PageOrDatabase, PaginatedList

from .transport import AsyncNotionTransport, NotionTransport


def _query_body(
    filter: dict[str, Any] | None,
    sorts: Sequence[dict[str, Any]] | None,
    start_cursor: str | None,
    page_size: int | None,
) -> dict[str, Any]:
    body: dict[str, Any] = {}
    if filter is not None:
        body["filter"] = filter
    if sorts is not None:
        body["sorts"] = list(sorts)
    if start_cursor:
        body["start_cursor"] = start_cursor
    if page_size is not None:
        body["page_size"] = page_size
    return body


def _list_params(start_cursor: str | None, page_size: int | None) -> dict[str, Any]:
    params: dict[str, Any] = {}
    if start_cursor:
        params["start_cursor"] = start_cursor
    if page_size is not None:
        params["page_size"] = page_size
    return params


class DatabaseAPI:
    """Synchronous wrapper for the Notion Databases API.

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

    def get(self, database_id: str, *, timeout: float | None = None) -> Database:
        """Retrieve a database and its property schema."""
        data = self._transport.request("GET", f"/databases/{database_id}", timeout=timeout)
        return self._decoder.database(data)

    def query(
        self,
        database_id: str,
        filter: dict[str, Any] | None = None,
        sorts: Sequence[dict[str, Any]] | None = None,
        start_cursor: str | None = None,
        page_size: int | None = None,
        *,
        timeout: float | None = None,
    ) -> PaginatedList[PageOrDatabase]:
        """Query a database.

        Parameters
        ----------
        database_id:
            The database to query.
        filter:
            A Notion filter object, passed through unchanged.
        sorts:
            Notion sort objects, passed through unchanged.
        start_cursor:
            ``next_cursor`` of the previous page of results.
        page_size:
            Maximum number of results (Notion caps it at 100).

        Returns
        -------
        PaginatedList
            Pages (and databases) in the order the server returned them.
        """
        body = _query_body(filter, sorts, start_cursor, page_size)
        data = self._transport.request(
            "POST", f"/databases/{database_id}/query", json=body, timeout=timeout
        )
        return self._decoder.paginated(data, self._decoder.object)

    def list(
        self,
        start_cursor: str | None = None,
        page_size: int | None = None,
        *,
        timeout: float | None = None,
    ) -> PaginatedList[Database]:
        """List the databases shared with the integration."""
        params = _list_params(start_cursor, page_size)
        data = self._transport.request("GET", "/databases", params=params or None, timeout=timeout)
        return self._decoder.paginated(data, self._decoder.database)


class AsyncDatabaseAPI:
    """Asynchronous wrapper for the Notion Databases API.

    Mirrors :class:`DatabaseAPI` with ``async`` methods.
    """

    def __init__(self, transport: AsyncNotionTransport, decoder: Decoder) -> None:
        self._transport = transport
        self._decoder = decoder

    async def get(self, database_id: str, *, timeout: float | None = None) -> Database:
        """See :meth:`DatabaseAPI.get`."""
        data = await self._transport.request("GET", f"/databases/{database_id}", timeout=timeout)
        return self._decoder.database(data)

    async def query(
        self,
        database_id: str,
        filter: dict[str, Any] | None = None,
        sorts: Sequence[dict[str, Any]] | None = None,
        start_cursor: str | None = None,
        page_size: int | None = None,
        *,
        timeout: float | None = None,
    ) -> PaginatedList[PageOrDatabase]:
        """See :meth:`DatabaseAPI.query`."""
        body = _query_body(filter, sorts, start_cursor, page_size)
        data = await self._transport.request(
            "POST", f"/databases/{database_id}/query", json=body, timeout=timeout
        )
        return self._decoder.paginated(data, self._decoder.object)

    async def list(
        self,
        start_cursor: str | None = None,
        page_size: int | None = None,
        *,
        timeout: float | None = None,
    ) -> PaginatedList[Database]:
        """See :meth:`DatabaseAPI.list`."""
        params = _list_params(start_cursor, page_size)
        data = await self._transport.request(
            "GET", "/databases", params=params or None, timeout=timeout
        )
        return self._decoder.paginated(data, self._decoder.database)
