"""Block API wrappers for the Notion API.

:class:`BlockAPI` and :class:`AsyncBlockAPI` cover the
``/blocks/{id}/children`` endpoint.  Children are never fetched
recursively; call :meth:`BlockAPI.list_children` again for any block whose
``has_children`` is set.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from typednotion.decoder import Decoder
from typednotion.objects import Block, PaginatedList

from .databases import _list_params
from .transport import AsyncNotionTransport, NotionTransport


def _children_body(children: Sequence[Block]) -> dict[str, Any]:
    return {"children": [block.to_dict() for block in children]}


class BlockAPI:
    """Synchronous wrapper for the Notion Blocks API.

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

    def list_children(
        self,
        block_id: str,
        start_cursor: str | None = None,
        page_size: int | None = None,
        *,
        timeout: float | None = None,
    ) -> PaginatedList[Block]:
        """Return one page of the direct children of a block (or page).

        Parameters
        ----------
        block_id:
            Id of the parent block or page.
        start_cursor:
            ``next_cursor`` of the previous page of results.
        page_size:
            Maximum number of results (Notion caps it at 100).
        """
        params = _list_params(start_cursor, page_size)
        data = self._transport.request(
            "GET", f"/blocks/{block_id}/children", params=params or None, timeout=timeout
        )
        return self._decoder.paginated(data, self._decoder.block)

    def append_children(
        self,
        block_id: str,
        children: Sequence[Block],
        *,
        timeout: float | None = None,
    ) -> Block:
        """Append *children* to a block and return the updated parent block."""
        data = self._transport.request(
            "PATCH",
            f"/blocks/{block_id}/children",
            json=_children_body(children),
            timeout=timeout,
        )
        return self._decoder.block(data)


class AsyncBlockAPI:
    """Asynchronous wrapper for the Notion Blocks API.

    Mirrors :class:`BlockAPI` with ``async`` methods.
    """

    def __init__(self, transport: AsyncNotionTransport, decoder: Decoder) -> None:
        self._transport = transport
        self._decoder = decoder

    async def list_children(
        self,
        block_id: str,
        start_cursor: str | None = None,
        page_size: int | None = None,
        *,
        timeout: float | None = None,
    ) -> PaginatedList[Block]:
        """See :meth:`BlockAPI.list_children`."""
        params = _list_params(start_cursor, page_size)
        data = await self._transport.request(
            "GET", f"/blocks/{block_id}/children", params=params or None, timeout=timeout
        )
        return self._decoder.paginated(data, self._decoder.block)

    async def append_children(
        self,
        block_id: str,
        children: Sequence[Block],
        *,
        timeout: float | None = None,
    ) -> Block:
        """See :meth:`BlockAPI.append_children`."""
        data = await self._transport.request(
            "PATCH",
            f"/blocks/{block_id}/children",
            json=_children_body(children),
            timeout=timeout,
        )
        return self._decoder.block(data)
