"""Rate-limit bookkeeping from Notion response headers.

Every response may carry three headers:

* ``X-RateLimit-Limit`` -- requests allowed in the current window;
* ``X-RateLimit-Remaining`` -- requests left in the window;
* ``X-RateLimit-Reset`` -- Unix epoch seconds at which the window resets.

:class:`RateLimitState` holds the latest values.  One instance is owned by
each transport and shared by every thread or task using it, so all reads
and writes go through a single lock.  The client never paces or retries on
these numbers; they are exposed for callers that implement their own
policy.
"""

from __future__ import annotations

import threading
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone

from typednotion.errors import NotionHeaderError

LIMIT_HEADER = "X-RateLimit-Limit"
REMAINING_HEADER = "X-RateLimit-Remaining"
RESET_HEADER = "X-RateLimit-Reset"

DEFAULT_LIMIT = 10_000
DEFAULT_REMAINING = 10_000


@dataclass(frozen=True)
class RateLimit:
    """Immutable snapshot of the rate-limit state."""

    limit: int
    remaining: int
    reset: datetime | None


def _parse_int(headers: Mapping[str, str], name: str) -> int | None:
    raw = headers.get(name)
    if raw is None:
        return None
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise NotionHeaderError(
            message=f"{name} header is not numeric: {raw!r}",
            context={"header": name, "value": raw},
            cause=exc,
        ) from exc


class RateLimitState:
    """Thread-safe holder of the most recent rate-limit headers.

    Parameters
    ----------
    limit:
        Initial request limit.
    remaining:
        Initial remaining-request count.
    """

    __slots__ = ("_limit", "_lock", "_remaining", "_reset")

    def __init__(self, limit: int = DEFAULT_LIMIT, remaining: int = DEFAULT_REMAINING) -> None:
        self._limit = limit
        self._remaining = remaining
        self._reset: datetime | None = None
        self._lock = threading.Lock()

    def snapshot(self) -> RateLimit:
        with self._lock:
            return RateLimit(limit=self._limit, remaining=self._remaining, reset=self._reset)

    def apply_headers(self, headers: Mapping[str, str]) -> RateLimit:
        """Update the state from *headers* and return the new snapshot.

        Absent headers leave their field unchanged.  All present headers are
        parsed before anything is written, so a malformed value raises
        :class:`NotionHeaderError` and leaves the state exactly as it was.
        ``headers`` should be case-insensitive (``httpx.Headers`` is).
        """
        limit = _parse_int(headers, LIMIT_HEADER)
        remaining = _parse_int(headers, REMAINING_HEADER)
        reset_epoch = _parse_int(headers, RESET_HEADER)
        reset = None
        if reset_epoch is not None:
            try:
                reset = datetime.fromtimestamp(reset_epoch, tz=timezone.utc)
            except (OverflowError, OSError, ValueError) as exc:
                raise NotionHeaderError(
                    message=f"{RESET_HEADER} header is out of range: {reset_epoch}",
                    context={"header": RESET_HEADER, "value": str(reset_epoch)},
                    cause=exc,
                ) from exc

        with self._lock:
            if limit is not None:
                self._limit = limit
            if remaining is not None:
                self._remaining = remaining
            if reset is not None:
                self._reset = reset
            return RateLimit(limit=self._limit, remaining=self._remaining, reset=self._reset)
