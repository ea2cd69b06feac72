"""Sync and async HTTP transports for the Notion API.

Each call goes through the same steps:

1. Send the request with the auth, version and user-agent headers.
2. Apply the ``X-RateLimit-*`` headers of the response to the transport's
   :class:`RateLimitState` (every response, error statuses included).
3. On ``2xx`` -- return the parsed JSON body (``{}`` when empty).
4. Otherwise -- raise the :class:`NotionAPIError` subclass for the status.

Nothing is retried: rate-limit and server errors surface immediately and
the caller owns the retry policy.  Async cancellation is never intercepted.
"""

from __future__ import annotations

import time
from typing import Any

import httpx

from typednotion.config import NotionConfig
from typednotion.errors import (
    APIErrorCode,
    NotionAPIError,
    NotionAuthError,
    NotionConflictError,
    NotionDecodeError,
    NotionHeaderError,
    NotionNetworkError,
    NotionNotFoundError,
    NotionPermissionError,
    NotionRateLimitError,
    NotionServerError,
    NotionTimeoutError,
    NotionValidationError,
)
from typednotion.observability import NoopMetricsHook, get_logger

from .rate_limit import RateLimit, RateLimitState

log = get_logger("typednotion.transport")

_STATUS_ERRORS: dict[int, type[NotionAPIError]] = {
    400: NotionValidationError,
    401: NotionAuthError,
    403: NotionPermissionError,
    404: NotionNotFoundError,
    409: NotionConflictError,
    429: NotionRateLimitError,
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _error_class(status: int) -> type[NotionAPIError]:
    if status in _STATUS_ERRORS:
        return _STATUS_ERRORS[status]
    if status >= 500:
        return NotionServerError
    return NotionAPIError


def _raise_for_status(response: httpx.Response, method: str, path: str, metrics: Any) -> None:
    """Raise the typed error for a non-2xx *response*.

    The Notion error body is ``{"object": "error", "status", "code",
    "message"}``.  A body that is not JSON still produces the typed error,
    with no ``api_code`` and the raw text as message.
    """
    status = response.status_code
    try:
        body = response.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        body = {}

    api_code = APIErrorCode.parse(body.get("code"))
    message = body.get("message") or response.text[:500] or response.reason_phrase

    code_tag = api_code.value if isinstance(api_code, APIErrorCode) else str(api_code)
    metrics.increment(
        "typednotion.api_errors_total",
        tags={"status": str(status), "api_code": code_tag},
    )
    log.warning(
        "Notion API error",
        extra={
            "extra_fields": {
                "op": "request",
                "method": method,
                "path": path,
                "status": status,
                "api_code": code_tag,
            }
        },
    )
    raise _error_class(status)(
        status=status,
        api_code=api_code,
        message=f"{method} {path} failed with {status}: {message}",
        context={"method": method, "path": path},
    )


def _parse_body(response: httpx.Response, method: str, path: str) -> dict:
    if not response.content:
        return {}
    try:
        body = response.json()
    except ValueError as exc:
        raise NotionDecodeError(
            f"malformed JSON in response to {method} {path}: {exc}",
            context={"path": "$", "request": f"{method} {path}"},
            cause=exc,
        ) from exc
    if not isinstance(body, dict):
        raise NotionDecodeError(
            f"expected a JSON object in response to {method} {path}",
            context={"path": "$", "request": f"{method} {path}"},
        )
    return body


def _handle_response(
    state: RateLimitState,
    metrics: Any,
    response: httpx.Response,
    method: str,
    path: str,
    elapsed_ms: float,
) -> dict:
    """Shared post-send processing for both transports."""
    status = str(response.status_code)
    metrics.increment("typednotion.requests_total", tags={"method": method, "status": status})
    metrics.timing(
        "typednotion.request_duration_ms",
        elapsed_ms,
        tags={"method": method, "status": status},
    )
    log.debug(
        "request complete",
        extra={
            "extra_fields": {
                "op": "request",
                "method": method,
                "path": path,
                "status": response.status_code,
                "duration_ms": round(elapsed_ms, 2),
            }
        },
    )

    try:
        snapshot = state.apply_headers(response.headers)
    except NotionHeaderError as exc:
        log.error(
            "Malformed rate-limit header",
            extra={"extra_fields": {"op": "request", "method": method, "path": path, **exc.context}},
        )
        raise
    metrics.gauge("typednotion.rate_limit_remaining", snapshot.remaining)

    if not response.is_success:
        _raise_for_status(response, method, path, metrics)
    return _parse_body(response, method, path)


def _network_error(metrics: Any, method: str, path: str, exc: httpx.TransportError) -> NotionNetworkError:
    metrics.increment("typednotion.requests_total", tags={"method": method, "status": "error"})
    log.warning(
        "Request network error",
        extra={"extra_fields": {"op": "request", "method": method, "path": path, "error": str(exc)}},
    )
    context = {"method": method, "path": path}
    if isinstance(exc, httpx.TimeoutException):
        return NotionTimeoutError(f"Timed out on {method} {path}: {exc}", context=context, cause=exc)
    return NotionNetworkError(f"Network error on {method} {path}: {exc}", context=context, cause=exc)


def _timeout(timeout: float | None) -> Any:
    return httpx.USE_CLIENT_DEFAULT if timeout is None else httpx.Timeout(timeout)


# ---------------------------------------------------------------------------
# Sync transport
# ---------------------------------------------------------------------------

class NotionTransport:
    """Synchronous HTTP transport.

    Parameters
    ----------
    config:
        A :class:`NotionConfig` supplying the token, headers and timeout.
    http_transport:
        Optional ``httpx`` transport to send requests through, e.g. an
        ``httpx.MockTransport`` in tests.  Environment proxy settings are
        ignored when one is given.
    """

    def __init__(
        self,
        config: NotionConfig,
        http_transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._config = config
        self._metrics = config.metrics if config.metrics is not None else NoopMetricsHook()
        self._rate_limit = RateLimitState()
        self._client = httpx.Client(
            base_url=config.base_url,
            headers=config.headers(),
            timeout=httpx.Timeout(config.timeout_seconds),
            proxy=config.http_proxy,
            transport=http_transport,
            trust_env=http_transport is None,
        )

    @property
    def rate_limit(self) -> RateLimit:
        """The most recent rate-limit values reported by the server."""
        return self._rate_limit.snapshot()

    def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> dict:
        """Execute one HTTP request against the Notion API.

        Parameters
        ----------
        method:
            HTTP method (``GET``, ``POST``, ``PATCH``).
        path:
            API path relative to ``base_url`` (e.g. ``/pages/abc``).
        json:
            JSON request body.
        params:
            Query-string parameters.
        timeout:
            Seconds to wait for this call, overriding the configured
            default.

        Returns
        -------
        dict
            The parsed JSON response body.

        Raises
        ------
        NotionAPIError
            On any non-2xx status (a status-specific subclass where one
            exists).
        NotionHeaderError
            When a rate-limit header is not numeric.
        NotionDecodeError
            When a successful response body is not a JSON object.
        NotionTimeoutError, NotionNetworkError
            On transport-level failures.
        """
        t0 = time.monotonic()
        try:
            response = self._client.request(
                method, path, json=json, params=params, timeout=_timeout(timeout)
            )
        except httpx.TransportError as exc:
            raise _network_error(self._metrics, method, path, exc) from exc
        elapsed_ms = (time.monotonic() - t0) * 1000
        return _handle_response(self._rate_limit, self._metrics, response, method, path, elapsed_ms)

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def __enter__(self) -> NotionTransport:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


# ---------------------------------------------------------------------------
# Async transport
# ---------------------------------------------------------------------------

class AsyncNotionTransport:
    """Asynchronous HTTP transport.

    Mirrors :class:`NotionTransport` on top of ``httpx.AsyncClient``.
    Cancelling the awaiting task aborts the in-flight request and the
    :class:`asyncio.CancelledError` propagates unchanged.
    """

    def __init__(
        self,
        config: NotionConfig,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._metrics = config.metrics if config.metrics is not None else NoopMetricsHook()
        self._rate_limit = RateLimitState()
        self._client = httpx.AsyncClient(
            base_url=config.base_url,
            headers=config.headers(),
            timeout=httpx.Timeout(config.timeout_seconds),
            proxy=config.http_proxy,
            transport=http_transport,
            trust_env=http_transport is None,
        )

    @property
    def rate_limit(self) -> RateLimit:
        return self._rate_limit.snapshot()

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> dict:
        """Execute one HTTP request against the Notion API (async).

        See :meth:`NotionTransport.request`.
        """
        t0 = time.monotonic()
        try:
            response = await self._client.request(
                method, path, json=json, params=params, timeout=_timeout(timeout)
            )
        except httpx.TransportError as exc:
            raise _network_error(self._metrics, method, path, exc) from exc
        elapsed_ms = (time.monotonic() - t0) * 1000
        return _handle_response(self._rate_limit, self._metrics, response, method, path, elapsed_ms)

    async def close(self) -> None:
        """Close the underlying async HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> AsyncNotionTransport:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()
