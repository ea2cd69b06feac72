"""Asynchronous Notion client.

:class:`AsyncNotionClient` mirrors :class:`NotionClient`; every accessor
method is a coroutine.

Usage::

    import asyncio
    from typednotion import AsyncNotionClient

    async def main():
        async with AsyncNotionClient(token="secret_xxx") as client:
            results = await client.search.search("Roadmap")
            for item in results.results:
                print(item.object.value, item.id)

    asyncio.run(main())
"""

from __future__ import annotations

from typing import Any

import httpx

from typednotion.config import NotionConfig
from typednotion.decoder import Decoder
from typednotion.notion_api.blocks import AsyncBlockAPI
from typednotion.notion_api.databases import AsyncDatabaseAPI
from typednotion.notion_api.pages import AsyncPageAPI
from typednotion.notion_api.rate_limit import RateLimit
from typednotion.notion_api.search import AsyncSearchAPI
from typednotion.notion_api.transport import AsyncNotionTransport
from typednotion.notion_api.users import AsyncUserAPI


class AsyncNotionClient:
    """Asynchronous Notion API client.

    Parameters
    ----------
    token:
        Notion integration token.  **Required.**
    http_transport:
        Optional ``httpx.AsyncBaseTransport`` requests are sent through.
    **kwargs:
        All remaining keyword arguments are forwarded to
        :class:`NotionConfig`.
    """

    def __init__(
        self,
        token: str,
        *,
        http_transport: httpx.AsyncBaseTransport | None = None,
        **kwargs: Any,
    ) -> None:
        self._config = NotionConfig(token=token, **kwargs)
        self._transport = AsyncNotionTransport(self._config, http_transport=http_transport)
        self._decoder = Decoder(max_depth=self._config.max_decode_depth)
        self.pages = AsyncPageAPI(self._transport, self._decoder)
        self.databases = AsyncDatabaseAPI(self._transport, self._decoder)
        self.blocks = AsyncBlockAPI(self._transport, self._decoder)
        self.users = AsyncUserAPI(self._transport, self._decoder)
        self.search = AsyncSearchAPI(self._transport, self._decoder)

    @property
    def config(self) -> NotionConfig:
        return self._config

    @property
    def rate_limit(self) -> RateLimit:
        """Rate-limit values from the most recent response."""
        return self._transport.rate_limit

    async def close(self) -> None:
        """Close the underlying async HTTP transport."""
        await self._transport.close()

    async def __aenter__(self) -> AsyncNotionClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()
