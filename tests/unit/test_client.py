"""Tests for NotionClient / AsyncNotionClient wiring."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from typednotion import AsyncNotionClient, NotionClient, RateLimit
from typednotion.notion_api import (
    AsyncBlockAPI,
    AsyncDatabaseAPI,
    AsyncPageAPI,
    AsyncSearchAPI,
    AsyncUserAPI,
    BlockAPI,
    DatabaseAPI,
    PageAPI,
    SearchAPI,
    UserAPI,
)


def _ok(request: httpx.Request) -> httpx.Response:
    return httpx.Response(
        200,
        json={"object": "list", "results": [], "next_cursor": None, "has_more": False},
        headers={"X-RateLimit-Limit": "1000", "X-RateLimit-Remaining": "99"},
    )


class TestNotionClient:
    def test_accessors(self):
        client = NotionClient(token="secret_test")
        assert isinstance(client.pages, PageAPI)
        assert isinstance(client.databases, DatabaseAPI)
        assert isinstance(client.blocks, BlockAPI)
        assert isinstance(client.users, UserAPI)
        assert isinstance(client.search, SearchAPI)
        client.close()

    def test_kwargs_forwarded_to_config(self):
        client = NotionClient(token="secret_test", notion_version="2022-06-28", max_decode_depth=8)
        assert client.config.notion_version == "2022-06-28"
        assert client._decoder.max_depth == 8
        client.close()

    def test_token_required(self):
        with pytest.raises(ValueError, match="token"):
            NotionClient(token="")

    def test_rate_limit_tracks_responses(self):
        with NotionClient(token="secret_test", http_transport=httpx.MockTransport(_ok)) as client:
            assert client.rate_limit == RateLimit(limit=10_000, remaining=10_000, reset=None)
            client.users.list()
            assert client.rate_limit.limit == 1000
            assert client.rate_limit.remaining == 99

    def test_per_call_timeout_reaches_transport(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return _ok(request)

        with NotionClient(token="secret_test", http_transport=httpx.MockTransport(handler)) as client:
            client.search.search(timeout=1.5)
        assert seen[0].extensions["timeout"]["read"] == 1.5

    def test_clients_do_not_share_rate_limits(self):
        first = NotionClient(token="secret_test", http_transport=httpx.MockTransport(_ok))
        second = NotionClient(token="secret_test", http_transport=httpx.MockTransport(_ok))
        first.users.list()
        assert first.rate_limit.remaining == 99
        assert second.rate_limit.remaining == 10_000
        first.close()
        second.close()


class TestAsyncNotionClient:
    async def test_accessors(self):
        async with AsyncNotionClient(token="secret_test") as client:
            assert isinstance(client.pages, AsyncPageAPI)
            assert isinstance(client.databases, AsyncDatabaseAPI)
            assert isinstance(client.blocks, AsyncBlockAPI)
            assert isinstance(client.users, AsyncUserAPI)
            assert isinstance(client.search, AsyncSearchAPI)

    async def test_rate_limit(self):
        async with AsyncNotionClient(
            token="secret_test", http_transport=httpx.MockTransport(_ok)
        ) as client:
            await client.users.list()
            assert client.rate_limit.remaining == 99

    async def test_cancelling_a_call_aborts_it(self):
        started = asyncio.Event()

        async def handler(request: httpx.Request) -> httpx.Response:
            started.set()
            await asyncio.sleep(60)
            return _ok(request)

        async with AsyncNotionClient(
            token="secret_test", http_transport=httpx.MockTransport(handler)
        ) as client:
            task = asyncio.create_task(client.blocks.list_children("b"))
            await started.wait()
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task
            assert client.rate_limit.remaining == 10_000

    async def test_deadline_surfaces_timeout(self):
        async def handler(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(60)
            return _ok(request)

        async with AsyncNotionClient(
            token="secret_test", http_transport=httpx.MockTransport(handler)
        ) as client:
            with pytest.raises(asyncio.TimeoutError):
                await asyncio.wait_for(client.users.list(), timeout=0.05)
