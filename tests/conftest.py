"""Shared test fixtures for the typednotion test suite."""

from __future__ import annotations

import copy
from collections.abc import Callable
from typing import Any

import pytest

from typednotion.config import NotionConfig
from typednotion.decoder import Decoder


def _span(content: str, url: str | None = None, **annotations: Any) -> dict[str, Any]:
    flags = {
        "bold": False,
        "italic": False,
        "strikethrough": False,
        "underline": False,
        "code": False,
        "color": "default",
    }
    flags.update(annotations)
    return {
        "type": "text",
        "text": {"content": content, "link": {"url": url} if url else None},
        "annotations": flags,
        "plain_text": content,
        "href": url,
    }


_PAGE: dict[str, Any] = {
    "object": "page",
    "id": "b55c9c91-384d-452b-81db-d1ef79372b75",
    "created_time": "2021-05-13T16:48:00.000Z",
    "last_edited_time": "2021-05-14T09:12:00.000Z",
    "parent": {"type": "database_id", "database_id": "48f8fee9-cd79-4180-bc2f-ec0398253067"},
    "archived": False,
    "url": "https://www.notion.so/Groceries-b55c9c91384d452b81dbd1ef79372b75",
    "properties": {
        "Name": {"id": "title", "type": "title", "title": [_span("Groceries")]},
        "Status": {
            "id": "%5EOE%40",
            "type": "select",
            "select": {"id": "opt-1", "name": "Doing", "color": "blue"},
        },
        "Due": {
            "id": "M%3BBw",
            "type": "date",
            "date": {"start": "2021-05-20", "end": None},
        },
    },
}

_DATABASE: dict[str, Any] = {
    "object": "database",
    "id": "48f8fee9-cd79-4180-bc2f-ec0398253067",
    "created_time": "2021-05-10T08:00:00.000Z",
    "last_edited_time": "2021-05-14T09:12:00.000Z",
    "title": [_span("Tasks")],
    "properties": {
        "Name": {"id": "title", "type": "title", "title": {}},
        "Status": {
            "id": "%5EOE%40",
            "type": "select",
            "select": {"options": [{"id": "opt-1", "name": "Doing", "color": "blue"}]},
        },
        "Due": {"id": "M%3BBw", "type": "date", "date": {}},
    },
}


@pytest.fixture
def config() -> NotionConfig:
    """Default test configuration with a dummy token."""
    return NotionConfig(token="test_token_1234")


@pytest.fixture
def decoder() -> Decoder:
    return Decoder()


@pytest.fixture
def span() -> Callable[..., dict[str, Any]]:
    """Factory for a plain-text rich text span payload."""
    return _span


@pytest.fixture
def page_payload() -> dict[str, Any]:
    """A page in a database, as returned by ``GET /pages/{id}``."""
    return copy.deepcopy(_PAGE)


@pytest.fixture
def database_payload() -> dict[str, Any]:
    """A database schema, as returned by ``GET /databases/{id}``."""
    return copy.deepcopy(_DATABASE)
