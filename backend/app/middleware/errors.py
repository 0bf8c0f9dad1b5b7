"""
Notes API — Unhandled Error Middleware
========================================

What:  Converts any exception that escaped the route handlers into the
       generic 500 failure envelope.
Why:   Starlette's own Exception handler runs in ServerErrorMiddleware,
       outside every user middleware. A 500 produced there has no
       X-Request-ID header and no access-log line. Rendering it here, as
       the innermost middleware, lets RequestIDMiddleware and
       RequestLoggingMiddleware treat it like any other response.
How:   Catches around call_next, logs the stack trace with the request ID,
       and answers with translate_error(exc).
"""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from app.exceptions import translate_error
from app.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """
    Last line of the error translator inside the middleware chain.

    Typed NotesAPIError and framework HTTP errors never reach this point;
    FastAPI's ExceptionMiddleware has already rendered them.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            rid = request_id_var.get("")
            logger.error(
                "[%s] Unexpected error on %s %s: %s",
                rid,
                request.method,
                request.url.path,
                str(exc),
                exc_info=exc,
                extra={"request_id": rid},
            )
            status_code, body = translate_error(exc)
            return JSONResponse(status_code=status_code, content=body)
