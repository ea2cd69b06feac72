"""Page API wrappers for the Notion API.

Provides :class:`PageAPI` (sync) and :class:`AsyncPageAPI` (async) over the
``/pages`` endpoints.  Request bodies are built from typed objects and every
response is decoded into a :class:`~typednotion.objects.Page`.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from typednotion.decoder import Decoder
from typednotion.objects import Block, Page, Parent, PropertyValue

from .transport import AsyncNotionTransport, NotionTransport


def _create_body(
    parent: Parent,
    properties: Mapping[str, PropertyValue],
    children: Sequence[Block] | None,
) -> dict[str, Any]:
    body: dict[str, Any] = {
        "parent": parent.to_dict(),
        "properties": _properties_body(properties),
    }
    if children is not None:
        body["children"] = [block.to_dict() for block in children]
    return body


def _properties_body(properties: Mapping[str, PropertyValue]) -> dict[str, Any]:
    return {name: value.to_dict() for name, value in properties.items()}


class PageAPI:
    """Synchronous wrapper for the Notion Pages API.

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

    def get(self, page_id: str, *, timeout: float | None = None) -> Page:
        """Retrieve a page, with its parent and property values resolved."""
        data = self._transport.request("GET", f"/pages/{page_id}", timeout=timeout)
        return self._decoder.page(data)

    def create(
        self,
        parent: Parent,
        properties: Mapping[str, PropertyValue],
        children: Sequence[Block] | None = None,
        *,
        timeout: float | None = None,
    ) -> Page:
        """Create a page.

        Parameters
        ----------
        parent:
            Where the page lives: a :class:`DatabaseParent` or
            :class:`PageParent`.
        properties:
            Initial property values keyed by property name.  Pages under a
            database must match its schema; pages under a page only take a
            ``title``.
        children:
            Optional content blocks.

        Returns
        -------
        Page
            The created page, with the server-assigned id and timestamps.
        """
        body = _create_body(parent, properties, children)
        data = self._transport.request("POST", "/pages", json=body, timeout=timeout)
        return self._decoder.page(data)

    def update_properties(
        self,
        page_id: str,
        properties: Mapping[str, PropertyValue],
        *,
        timeout: float | None = None,
    ) -> Page:
        """Update some of a page's property values.

        Only the given properties are sent; the server keeps the others.
        The returned page is whatever the server echoes back, so it holds
        every property, not only the updated ones.
        """
        body = {"properties": _properties_body(properties)}
        data = self._transport.request("PATCH", f"/pages/{page_id}", json=body, timeout=timeout)
        return self._decoder.page(data)


class AsyncPageAPI:
    """Asynchronous wrapper for the Notion Pages API.

    Mirrors :class:`PageAPI` with ``async`` methods.
    """

    def __init__(self, transport: AsyncNotionTransport, decoder: Decoder) -> None:
        self._transport = transport
        self._decoder = decoder

    async def get(self, page_id: str, *, timeout: float | None = None) -> Page:
        """See :meth:`PageAPI.get`."""
        data = await self._transport.request("GET", f"/pages/{page_id}", timeout=timeout)
        return self._decoder.page(data)

    async def create(
        self,
        parent: Parent,
        properties: Mapping[str, PropertyValue],
        children: Sequence[Block] | None = None,
        *,
        timeout: float | None = None,
    ) -> Page:
        """See :meth:`PageAPI.create`."""
        body = _create_body(parent, properties, children)
        data = await self._transport.request("POST", "/pages", json=body, timeout=timeout)
        return self._decoder.page(data)

    async def update_properties(
        self,
        page_id: str,
        properties: Mapping[str, PropertyValue],
        *,
        timeout: float | None = None,
    ) -> Page:
        """See :meth:`PageAPI.update_properties`."""
        body = {"properties": _properties_body(properties)}
        data = await self._transport.request(
            "PATCH", f"/pages/{page_id}", json=body, timeout=timeout
        )
        return self._decoder.page(data)
