"""
ScanGate — Access Log Middleware
==================================

What:  Tags each request with a correlation ID and writes one access line
       naming the table scanned and how many items came back.
Why:   A 500 from /testdb carries no detail for the client. The ID in the
       X-Request-ID header matches the access line to the gateway error
       line that holds the AWS error code.
How:   The ID goes into a ContextVar before the route runs (exception
       handlers read it from there). The scan route leaves the table name
       and item count on request.state; they are read back here.

Access line:
    GET /testdb 200 41.7ms [a1b2c3d4] table=my-table items=3
    GET /testdb 500 12.0ms [a1b2c3d4] table=my-table items=-
    GET /nope 404 0.4ms [a1b2c3d4] table=- items=-

Levels: 5xx → ERROR, 4xx → WARNING, else INFO. Scanned items are never logged.
"""

import logging
import time
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("scangate.access")

# Coroutine-local: concurrent requests on the same thread each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

REQUEST_ID_HEADER = "X-Request-ID"


def _level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Request ID plus one access-log line per request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]
        request_id_var.set(rid)
        started = time.perf_counter()

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid

        table = getattr(request.state, "scanned_table", None)
        items = getattr(request.state, "scanned_items", None)
        logger.log(
            _level_for(response.status_code),
            "%s %s %d %.1fms [%s] table=%s items=%s",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - started) * 1000,
            rid,
            table or "-",
            "-" if items is None else items,
        )
        return response
