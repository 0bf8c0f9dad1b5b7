"""
Notes API — Request ID Middleware
===================================

What:  Assigns a unique ID to each incoming request and adds it to the response.
Why:   Every log line from a single request shares the same ID, and clients
       can quote the X-Request-ID header when reporting a failure.
How:   Creates a short UUID (or reuses the client's X-Request-ID), stores it
       in a ContextVar for loggers, returns it in the response header.
Who:   Applied to every request via Starlette middleware.
"""

import uuid
import logging
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local storage: concurrent requests on one thread each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDLogFilter(logging.Filter):
    """
    Stamps every log record with the current request ID.

    Attached to the root handler in setup_logging() so that the format
    string can use %(request_id)s. Records emitted outside a request get "-".
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "request_id", None):
            record.request_id = request_id_var.get("") or "-"
        return True


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware that assigns a unique ID to each request for tracing.

    Behavior:
        1. If the client sent X-Request-ID, use it
        2. Otherwise generate a new 8-character UUID prefix
        3. Store in ContextVar for loggers and in request.state for handlers
        4. Add to response headers
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]

        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers["X-Request-ID"] = rid
        return response
