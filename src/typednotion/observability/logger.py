"""JSON-lines logging for typednotion.

Each record becomes one JSON object::

    {"ts": "2026-01-05T09:30:00.000000+00:00", "level": "DEBUG",
     "logger": "typednotion.transport", "message": "request complete",
     "method": "GET", "path": "/pages/abc", "status": 200}

Structured fields are passed with ``extra={"extra_fields": {...}}``.
Keys that could carry credentials are masked before the record is written.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

_SENSITIVE_KEYS = frozenset({"authorization", "token", "api_key"})


class StructuredFormatter(logging.Formatter):
    """Render a :class:`logging.LogRecord` as a single-line JSON object.

    Guaranteed keys are ``ts``, ``level``, ``logger`` and ``message``;
    ``extra_fields`` are merged at the top level, and ``exception`` is added
    when the record carries exception info.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        fields: dict[str, Any] | None = getattr(record, "extra_fields", None)
        if fields:
            for key, value in fields.items():
                entry[key] = "<redacted>" if key.lower() in _SENSITIVE_KEYS else value

        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


# Names that already have a handler attached; keeps get_logger idempotent.
_configured: set[str] = set()


def get_logger(
    name: str = "typednotion",
    *,
    level: int | str = logging.WARNING,
    stream: Any | None = None,
) -> logging.Logger:
    """Return the named logger, attaching a JSON handler on first use.

    Parameters
    ----------
    name:
        Logger name.  Library modules use children of ``"typednotion"``.
    level:
        Initial level, as an ``int`` or a case-insensitive name.  Request
        traces are logged at ``DEBUG``; lower the level to see them.
    stream:
        Handler output stream.  Defaults to ``sys.stderr``.
    """
    logger = logging.getLogger(name)
    if name in _configured:
        return logger

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logger.setLevel(level)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(StructuredFormatter())
    logger.addHandler(handler)
    logger.propagate = False

    _configured.add(name)
    return logger
