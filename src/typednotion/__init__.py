"""typednotion -- a typed client for the Notion REST API.

Public re-exports
-----------------

* **Clients:** :class:`NotionClient`, :class:`AsyncNotionClient`
* **Configuration:** :class:`NotionConfig`
* **Decoding:** :class:`Decoder`
* **Errors:** every :class:`NotionError` subclass, :class:`ErrorCode`,
  :class:`APIErrorCode`
* **Rate limits:** :class:`RateLimit`

Typed objects live in :mod:`typednotion.objects`.

Usage::

    from typednotion import NotionClient

    client = NotionClient(token="secret_xxx")
    db = client.databases.get("<database_id>")
    print(list(db.properties))
"""

from __future__ import annotations

# ── Clients ────────────────────────────────────────────────────────────
from typednotion.async_client import AsyncNotionClient
from typednotion.client import NotionClient

# ── Configuration ───────────────────────────────────────────────────────
from typednotion.config import NotionConfig

# ── Decoding ────────────────────────────────────────────────────────────
from typednotion.decoder import Decoder

# ── Errors ──────────────────────────────────────────────────────────────
from typednotion.errors import (
    APIErrorCode,
    ErrorCode,
    NotionAPIError,
    NotionAuthError,
    NotionConflictError,
    NotionDecodeError,
    NotionError,
    NotionHeaderError,
    NotionNetworkError,
    NotionNotFoundError,
    NotionPermissionError,
    NotionRateLimitError,
    NotionServerError,
    NotionTimeoutError,
    NotionUnsupportedKindError,
    NotionValidationError,
)

# ── Rate limits ─────────────────────────────────────────────────────────
from typednotion.notion_api.rate_limit import RateLimit

__version__ = "0.1.0"

__all__ = [
    "APIErrorCode",
    "AsyncNotionClient",
    "Decoder",
    "ErrorCode",
    "NotionAPIError",
    "NotionAuthError",
    "NotionClient",
    "NotionConfig",
    "NotionConflictError",
    "NotionDecodeError",
    "NotionError",
    "NotionHeaderError",
    "NotionNetworkError",
    "NotionNotFoundError",
    "NotionPermissionError",
    "NotionRateLimitError",
    "NotionServerError",
    "NotionTimeoutError",
    "NotionUnsupportedKindError",
    "NotionValidationError",
    "RateLimit",
    "__version__",
]
