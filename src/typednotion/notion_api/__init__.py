"""typednotion.notion_api -- transport and per-resource wrappers.

* :mod:`.transport` -- HTTP transports (sync and async) over ``httpx``.
* :mod:`.rate_limit` -- rate-limit state read from response headers.
* :mod:`.pages`, :mod:`.databases`, :mod:`.blocks`, :mod:`.users`,
  :mod:`.search` -- endpoint wrappers returning typed objects.
"""

from __future__ import annotations

from .blocks import AsyncBlockAPI, BlockAPI
from .databases import AsyncDatabaseAPI, DatabaseAPI
from .pages import AsyncPageAPI, PageAPI
from .rate_limit import RateLimit, RateLimitState
from .search import AsyncSearchAPI, SearchAPI
from .transport import AsyncNotionTransport, NotionTransport
from .users import AsyncUserAPI, UserAPI

__all__ = [
    "AsyncBlockAPI",
    "AsyncDatabaseAPI",
    "AsyncNotionTransport",
    "AsyncPageAPI",
    "AsyncSearchAPI",
    "AsyncUserAPI",
    "BlockAPI",
    "DatabaseAPI",
    "NotionTransport",
    "PageAPI",
    "RateLimit",
    "RateLimitState",
    "SearchAPI",
    "UserAPI",
]
