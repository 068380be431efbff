"""Request context middleware: assigns a unique ID to every request.

Registry operations interleave in the logs; the request ID ties every
line one call produced (the denial warning, the revocation info line, the
completion summary) back to a single HTTP request.

The ID lives in a ContextVar, not a thread-local: async handlers share a
thread, and each task needs its own copy.
"""

from __future__ import annotations

import logging
import time
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)

request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


class _RequestContextFilter(logging.Filter):
    """Attach the current request_id to every LogRecord.

    A filter (not a formatter) because only filters can add fields to the
    record before it is formatted.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = request_id_var.get("-")  # type: ignore[attr-defined]
        return True


def install_request_context_filter(handler: logging.Handler | None = None) -> None:
    """Install the filter on the root logger's handlers.

    Logger-level filters do not run for records propagated from child
    loggers, so the filter goes on the handlers that do the emitting.
    """
    root = logging.getLogger()
    handlers = [handler] if handler is not None else root.handlers
    for h in handlers:
        if not any(isinstance(f, _RequestContextFilter) for f in h.filters):
            h.addFilter(_RequestContextFilter())


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Assign a request ID, time the request, and log one summary line.

    1. Reads X-Request-ID (if the client sent one) or generates a UUID
    2. Stores it in a ContextVar for the rest of the call chain
    3. Logs method, path, status and duration on completion
    4. Echoes X-Request-ID on the response
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        req_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request_id_var.set(req_id)

        start = time.monotonic()
        response = await call_next(request)
        duration_ms = round((time.monotonic() - start) * 1000, 1)

        logger.info(
            "%s %s → %d (%.1fms)",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            extra={
                "request_id": req_id,
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )

        response.headers["X-Request-ID"] = req_id
        return response
