"""Metrics hook protocol.

The transport reports every request through a :class:`MetricsHook`.  Pass
your own implementation as ``NotionConfig(metrics=...)`` to forward the data
points to StatsD, Prometheus or similar; by default they are dropped.

Emitted metrics:

* ``typednotion.requests_total`` -- counter, tagged ``method``, ``status``
* ``typednotion.request_duration_ms`` -- timing, tagged ``method``, ``status``
* ``typednotion.api_errors_total`` -- counter, tagged ``status``, ``api_code``
* ``typednotion.rate_limit_remaining`` -- gauge
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class MetricsHook(Protocol):
    """Anything with these three methods can receive typednotion metrics.

    *tags* is an optional ``str -> str`` mapping; backends translate it to
    their own labelling scheme.
    """

    def increment(self, name: str, value: int = 1, tags: dict[str, str] | None = None) -> None:
        """Add *value* to the counter *name*."""
        ...

    def timing(self, name: str, ms: float, tags: dict[str, str] | None = None) -> None:
        """Record a duration of *ms* milliseconds."""
        ...

    def gauge(self, name: str, value: float, tags: dict[str, str] | None = None) -> None:
        """Set the gauge *name* to *value*."""
        ...


class NoopMetricsHook:
    """Discards every data point."""

    __slots__ = ()

    def increment(self, name: str, value: int = 1, tags: dict[str, str] | None = None) -> None:
        pass

    def timing(self, name: str, ms: float, tags: dict[str, str] | None = None) -> None:
        pass

    def gauge(self, name: str, value: float, tags: dict[str, str] | None = None) -> None:
        pass
