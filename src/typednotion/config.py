"""Client configuration for typednotion.

:class:`NotionConfig` is a plain dataclass capturing every knob the client
exposes.  Instances are passed to both :class:`NotionClient` and
:class:`AsyncNotionClient`; the clients build one for you from keyword
arguments.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlparse

DEFAULT_BASE_URL = "https://api.notion.com/v1"

DEFAULT_NOTION_VERSION = "2021-05-13"

DEFAULT_USER_AGENT = "typednotion"

DEFAULT_MAX_DECODE_DEPTH = 64
"""Maximum nesting of block children (and rollup arrays) the decoder will
follow before failing with a "too deeply nested" error."""

MAX_DECODE_DEPTH_LIMIT = 128
"""Upper bound for ``max_decode_depth``.  Each nesting level costs several
interpreter frames, so deeper limits would hit Python's recursion limit
before the depth guard."""


@dataclass
class NotionConfig:
    """Complete configuration for a typednotion client.

    Every parameter has a default, so the only *required* value is
    ``token``.

    Parameters
    ----------
    token:
        Notion integration token.  **Required.**  Never logged.
    notion_version:
        Value of the ``Notion-Version`` header sent with every request.
    base_url:
        API root URL.  Override for proxy or testing environments.
    user_agent:
        Value of the ``User-Agent`` header.  An empty string omits the
        header.
    timeout_seconds:
        Default HTTP timeout in seconds.  Individual calls may override it.
    http_proxy:
        Optional HTTP/HTTPS proxy URL.
    max_decode_depth:
        Deepest block-children nesting the decoder accepts, at most
        ``MAX_DECODE_DEPTH_LIMIT``.
    metrics:
        Optional :class:`~typednotion.observability.MetricsHook` backend.
    """

    # ── Core ────────────────────────────────────────────────────────────
    token: str = ""

    notion_version: str = DEFAULT_NOTION_VERSION

    base_url: str = DEFAULT_BASE_URL

    user_agent: str = DEFAULT_USER_AGENT

    # ── HTTP ────────────────────────────────────────────────────────────
    timeout_seconds: float = 30.0

    http_proxy: str | None = None

    # ── Decoding ────────────────────────────────────────────────────────
    max_decode_depth: int = DEFAULT_MAX_DECODE_DEPTH

    # ── Observability ──────────────────────────────────────────────────
    metrics: Any | None = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.token:
            raise ValueError("token is required")

        parsed = urlparse(self.base_url)
        if parsed.scheme not in ("http", "https"):
            raise ValueError(f"base_url must be an http(s) URL, got {self.base_url!r}")
        if parsed.scheme == "http" and parsed.hostname not in (
            "localhost",
            "127.0.0.1",
            "::1",
        ):
            raise ValueError(
                f"base_url uses insecure HTTP for non-local host '{parsed.hostname}'. "
                "Use HTTPS to protect your API token, or target localhost for testing."
            )

        if self.timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be > 0, got {self.timeout_seconds}")
        if not 1 <= self.max_decode_depth <= MAX_DECODE_DEPTH_LIMIT:
            raise ValueError(
                f"max_decode_depth must be between 1 and {MAX_DECODE_DEPTH_LIMIT}, "
                f"got {self.max_decode_depth}"
            )

    def headers(self) -> dict[str, str]:
        """Return the headers attached to every request."""
        headers = {
            "Authorization": f"Bearer {self.token}",
            "Notion-Version": self.notion_version,
            "Content-Type": "application/json",
        }
        if self.user_agent:
            headers["User-Agent"] = self.user_agent
        return headers

    def __repr__(self) -> str:
        """Mask the token to prevent accidental credential leakage."""
        parts: list[str] = []
        for f in dataclasses.fields(self):
            val = getattr(self, f.name)
            if f.name == "token":
                masked = f"...{val[-4:]}" if len(val) >= 4 else "****"
                parts.append(f"token='{masked}'")
            else:
                parts.append(f"{f.name}={val!r}")
        return f"NotionConfig({', '.join(parts)})"
