"""Error hierarchy for the typednotion client.

Every public error class inherits from :class:`NotionError`.  Each carries a
machine-readable ``code`` (from :class:`ErrorCode`), a human-readable
``message``, an optional structured ``context`` dict, and an optional
``cause`` (chained exception).

Errors fall into four families:

* **Transport** -- the request never produced an HTTP response.
* **API** -- the server answered with a non-2xx status.  These also carry
  the server's own machine code as an :class:`APIErrorCode`.
* **Decode** -- the response body could not be turned into typed objects.
  ``context["path"]`` always names the offending field.
* **Header** -- a rate-limit header held a non-numeric value.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

# ---------------------------------------------------------------------------
# Error code enums
# ---------------------------------------------------------------------------

class ErrorCode(str, Enum):
    """Client-side error categories for every error the library can raise."""

    NETWORK_ERROR = "NETWORK_ERROR"
    TIMEOUT = "TIMEOUT"
    API_ERROR = "API_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    AUTH_ERROR = "AUTH_ERROR"
    PERMISSION_ERROR = "PERMISSION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    RATE_LIMITED = "RATE_LIMITED"
    SERVER_ERROR = "SERVER_ERROR"
    DECODE_ERROR = "DECODE_ERROR"
    UNSUPPORTED_KIND = "UNSUPPORTED_KIND"
    HEADER_ERROR = "HEADER_ERROR"


class APIErrorCode(str, Enum):
    """Machine codes returned by the Notion API in error bodies.

    See https://developers.notion.com/reference/errors
    """

    INVALID_JSON = "invalid_json"
    INVALID_REQUEST_URL = "invalid_request_url"
    INVALID_REQUEST = "invalid_request"
    VALIDATION_ERROR = "validation_error"
    UNAUTHORIZED = "unauthorized"
    RESTRICTED_RESOURCE = "restricted_resource"
    OBJECT_NOT_FOUND = "object_not_found"
    CONFLICT_ERROR = "conflict_error"
    RATE_LIMITED = "rate_limited"
    INTERNAL_SERVER_ERROR = "internal_server_error"
    SERVICE_UNAVAILABLE = "service_unavailable"

    @classmethod
    def parse(cls, raw: Any) -> APIErrorCode | str | None:
        """Map *raw* to a member, keeping unknown strings as-is."""
        if raw is None or raw == "":
            return None
        try:
            return cls(raw)
        except ValueError:
            return str(raw)


# ---------------------------------------------------------------------------
# Base error
# ---------------------------------------------------------------------------

class NotionError(Exception):
    """Base exception for all typednotion errors.

    Parameters
    ----------
    code:
        A value from :class:`ErrorCode` identifying the error category.
    message:
        A developer-friendly description of what went wrong.
    context:
        Structured diagnostic detail.  Keys are documented per subclass.
    cause:
        The underlying exception, if this error wraps another.
    """

    def __init__(
        self,
        code: str,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.code: str = code
        self.message: str = message
        self.context: dict[str, Any] = context or {}
        self.cause: Exception | None = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        ctx = f", context={self.context!r}" if self.context else ""
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r}{ctx})"


# ---------------------------------------------------------------------------
# Transport errors
# ---------------------------------------------------------------------------

class NotionNetworkError(NotionError):
    """A transport-level failure occurred (DNS, connection reset, ...).

    Context keys: ``method``, ``path``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
        code: str = ErrorCode.NETWORK_ERROR,
    ) -> None:
        super().__init__(code=code, message=message, context=context, cause=cause)


class NotionTimeoutError(NotionNetworkError):
    """The request did not complete before its deadline.

    Context keys: ``method``, ``path``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, context=context, cause=cause, code=ErrorCode.TIMEOUT)


# ---------------------------------------------------------------------------
# API errors
# ---------------------------------------------------------------------------

class NotionAPIError(NotionError):
    """The Notion API answered with a non-success HTTP status.

    Attributes
    ----------
    status:
        The HTTP status code.
    api_code:
        The server's machine code.  An :class:`APIErrorCode` member when the
        code is known, the raw string when it is not, ``None`` when the body
        carried no code at all.

    Context keys: ``status_code``, ``api_code``, ``method``, ``path``.
    """

    default_code: str = ErrorCode.API_ERROR

    def __init__(
        self,
        status: int,
        api_code: APIErrorCode | str | None,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        self.status: int = status
        self.api_code: APIErrorCode | str | None = api_code
        ctx = {"status_code": status, "api_code": api_code}
        ctx.update(context or {})
        super().__init__(code=self.default_code, message=message, context=ctx)


class NotionValidationError(NotionAPIError):
    """HTTP 400 -- the request payload was invalid."""

    default_code = ErrorCode.VALIDATION_ERROR


class NotionAuthError(NotionAPIError):
    """HTTP 401 -- the integration token is invalid or expired."""

    default_code = ErrorCode.AUTH_ERROR


class NotionPermissionError(NotionAPIError):
    """HTTP 403 -- the integration lacks access to the resource."""

    default_code = ErrorCode.PERMISSION_ERROR


class NotionNotFoundError(NotionAPIError):
    """HTTP 404 -- the requested resource does not exist."""

    default_code = ErrorCode.NOT_FOUND


class NotionConflictError(NotionAPIError):
    """HTTP 409 -- the transaction conflicted with another one."""

    default_code = ErrorCode.CONFLICT


class NotionRateLimitError(NotionAPIError):
    """HTTP 429 -- the rate limit was exceeded.  Not retried internally."""

    default_code = ErrorCode.RATE_LIMITED


class NotionServerError(NotionAPIError):
    """HTTP 5xx -- the service failed or is unavailable."""

    default_code = ErrorCode.SERVER_ERROR


# ---------------------------------------------------------------------------
# Decode errors
# ---------------------------------------------------------------------------

class NotionDecodeError(NotionError):
    """A payload could not be decoded into typed objects.

    Raised for malformed JSON, missing required fields, type mismatches and
    nesting beyond the configured depth.  The whole decode is abandoned.

    Context keys: ``path`` (always), plus ``expected`` / ``actual`` for
    type mismatches.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
        code: str = ErrorCode.DECODE_ERROR,
    ) -> None:
        super().__init__(code=code, message=message, context=context, cause=cause)

    @property
    def path(self) -> str:
        return self.context.get("path", "$")


class NotionUnsupportedKindError(NotionDecodeError):
    """A discriminator held an unknown value, or was missing.

    Context keys: ``path``, ``family`` (e.g. ``"block"``), ``kind`` (the
    offending tag, ``None`` when missing).
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, context=context, code=ErrorCode.UNSUPPORTED_KIND)

    @property
    def kind(self) -> Any:
        return self.context.get("kind")


# ---------------------------------------------------------------------------
# Header errors
# ---------------------------------------------------------------------------

class NotionHeaderError(NotionError):
    """A rate-limit response header carried a non-numeric value.

    Context keys: ``header``, ``value``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.HEADER_ERROR,
            message=message,
            context=context,
            cause=cause,
        )
