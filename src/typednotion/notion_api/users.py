"""User API wrappers for the Notion API."""

from __future__ import annotations

from typednotion.decoder import Decoder
from typednotion.objects import PaginatedList, User

from .databases import _list_params
from .transport import AsyncNotionTransport, NotionTransport


class UserAPI:
    """Synchronous wrapper for the Notion Users API."""

    def __init__(self, transport: NotionTransport, decoder: Decoder) -> None:
        self._transport = transport
        self._decoder = decoder

    def get(self, user_id: str, *, timeout: float | None = None) -> User:
        """Retrieve a person or bot user."""
        data = self._transport.request("GET", f"/users/{user_id}", timeout=timeout)
        return self._decoder.user(data)

    def list(
        self,
        start_cursor: str | None = None,
        page_size: int | None = None,
        *,
        timeout: float | None = None,
    ) -> PaginatedList[User]:
        """List the users of the workspace."""
        params = _list_params(start_cursor, page_size)
        data = self._transport.request("GET", "/users", params=params or None, timeout=timeout)
        return self._decoder.paginated(data, self._decoder.user)


class AsyncUserAPI:
    """Asynchronous wrapper for the Notion Users API."""

    def __init__(self, transport: AsyncNotionTransport, decoder: Decoder) -> None:
        self._transport = transport
        self._decoder = decoder

    async def get(self, user_id: str, *, timeout: float | None = None) -> User:
        data = await self._transport.request("GET", f"/users/{user_id}", timeout=timeout)
        return self._decoder.user(data)

    async def list(
        self,
        start_cursor: str | None = None,
        page_size: int | None = None,
        *,
        timeout: float | None = None,
    ) -> PaginatedList[User]:
        params = _list_params(start_cursor, page_size)
        data = await self._transport.request(
            "GET", "/users", params=params or None, timeout=timeout
        )
        return self._decoder.paginated(data, self._decoder.user)
