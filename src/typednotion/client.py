"""Synchronous Notion client.

:class:`NotionClient` wires a :class:`NotionConfig` to one transport, one
decoder and the per-resource accessors.

Usage::

    from typednotion import NotionClient

    with NotionClient(token="secret_xxx") as client:
        page = client.pages.get("<page_id>")
        children = client.blocks.list_children(page.id)
        for block in children.results:
            print(block.type.value)
"""

from __future__ import annotations

from typing import Any

import httpx

from typednotion.config import NotionConfig
from typednotion.decoder import Decoder
from typednotion.notion_api.blocks import BlockAPI
from typednotion.notion_api.databases import DatabaseAPI
from typednotion.notion_api.pages import PageAPI
from typednotion.notion_api.rate_limit import RateLimit
from typednotion.notion_api.search import SearchAPI
from typednotion.notion_api.transport import NotionTransport
from typednotion.notion_api.users import UserAPI


class NotionClient:
    """Synchronous Notion API client.

    Parameters
    ----------
    token:
        Notion integration token.  **Required.**
    http_transport:
        Optional ``httpx.BaseTransport`` requests are sent through; inject
        an ``httpx.MockTransport`` to test without a network.
    **kwargs:
        All remaining keyword arguments are forwarded to
        :class:`NotionConfig`.

    Attributes
    ----------
    pages, databases, blocks, users, search:
        The resource accessors.

    A client may be shared between threads.
    """

    def __init__(
        self,
        token: str,
        *,
        http_transport: httpx.BaseTransport | None = None,
        **kwargs: Any,
    ) -> None:
        self._config = NotionConfig(token=token, **kwargs)
        self._transport = NotionTransport(self._config, http_transport=http_transport)
        self._decoder = Decoder(max_depth=self._config.max_decode_depth)
        self.pages = PageAPI(self._transport, self._decoder)
        self.databases = DatabaseAPI(self._transport, self._decoder)
        self.blocks = BlockAPI(self._transport, self._decoder)
        self.users = UserAPI(self._transport, self._decoder)
        self.search = SearchAPI(self._transport, self._decoder)

    @property
    def config(self) -> NotionConfig:
        return self._config

    @property
    def rate_limit(self) -> RateLimit:
        """Rate-limit values from the most recent response."""
        return self._transport.rate_limit

    def close(self) -> None:
        """Close the underlying HTTP transport."""
        self._transport.close()

    def __enter__(self) -> NotionClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
