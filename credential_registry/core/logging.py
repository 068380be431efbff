"""Logging configuration for credential-registry.

LOG_JSON picks one of two output formats:

  _ContainerFormatter: one human-readable line per record.  Registry
    context (who called, under which request) trails the message as
    key=value pairs:

      2024-03-23T10:00:00.123+0000 WARNING  ...authorization_service  Access denied: caller=ST3AM... action=issue  [authorization_service.py:44]  request_id=9f1c... caller=ST3AM...

  _JsonFormatter: JSON Lines for log aggregation.  The same context
    fields become top-level keys, so

      level == "WARNING" AND caller == "ST3AM..."

    finds every denied operation for one principal.

Context fields come from two places.  RequestContextMiddleware stamps
request_id/method/path/status_code/duration_ms; the registry services
pass `caller` through `extra=`.
"""

from __future__ import annotations

import json
import logging
import sys

CONTEXT_FIELDS: tuple[str, ...] = (
    "request_id",
    "caller",
    "method",
    "path",
    "status_code",
    "duration_ms",
)

# Only these trail container lines; the request summary line already
# spells out method, path, status and timing in its message.
_INLINE_FIELDS = ("request_id", "caller")

_NOISY_LOGGERS = ("uvicorn", "uvicorn.access", "uvicorn.error", "httpcore", "httpx")


def _context(record: logging.LogRecord, fields: tuple[str, ...]) -> dict[str, object]:
    out: dict[str, object] = {}
    for key in fields:
        value = getattr(record, key, None)
        # "-" is the request-id placeholder outside a request.
        if value is not None and value != "-":
            out[key] = value
    return out


class _ContainerFormatter(logging.Formatter):
    """Single-line formatter for container stdout.

    WARNING and above also carry [filename:lineno], which points at the
    guard clause that rejected the operation.
    """

    _BASE_FMT = "%(asctime)s %(levelname)-8s %(name)s  %(message)s"
    _LOC_SUFFIX = "  [%(filename)s:%(lineno)d]"

    def __init__(self) -> None:
        super().__init__(datefmt="%Y-%m-%dT%H:%M:%S%z")

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        base = super().formatTime(record, datefmt)
        # Milliseconds go before the +0000 offset.
        return f"{base[:-5]}.{int(record.msecs):03d}{base[-5:]}"

    def format(self, record: logging.LogRecord) -> str:
        if record.levelno >= logging.WARNING:
            self._style._fmt = self._BASE_FMT + self._LOC_SUFFIX
        else:
            self._style._fmt = self._BASE_FMT
        line = super().format(record)

        context = _context(record, _INLINE_FIELDS)
        if not context:
            return line
        pairs = " ".join(f"{k}={v}" for k, v in context.items())
        # Keep a traceback, if any, below the context.
        head, sep, tail = line.partition("\n")
        return f"{head}  {pairs}{sep}{tail}"


class _JsonFormatter(logging.Formatter):
    """One JSON object per record."""

    def __init__(self) -> None:
        super().__init__(datefmt="%Y-%m-%dT%H:%M:%S%z")

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(_context(record, CONTEXT_FIELDS))

        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def setup_logging(level_name: str, *, json_format: bool = False) -> logging.Handler:
    """Replace the root handlers with a single stdout handler.

    Unknown level names fall back to INFO.  Returns the installed handler
    so callers can attach filters to it.
    """
    level = getattr(logging, level_name.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_JsonFormatter() if json_format else _ContainerFormatter())

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    return handler
