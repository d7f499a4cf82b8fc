"""
Quillpost Backend — Request Logging Middleware
=================================================

What:  One access log line per HTTP request, plus the last-resort 500 for
       exceptions no handler claimed.
Who:   Applied to every request via Starlette middleware.
When:  Inside RequestIDMiddleware (uses request ID for correlation).

Line format (route template, not the raw path, so ids don't fan out):
    POST /api/posts/{postId}/comments 201 4.2ms [1f0c2a9b] from 127.0.0.1

Request bodies are never logged (they carry emails and free text).
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from quillpost.middleware.request_id import request_id_var

logger = logging.getLogger("quillpost.access")

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."


def unexpected_error_response(rid: str) -> JSONResponse:
    """The 500 body for an unhandled exception; details stay in the log."""
    return JSONResponse(
        status_code=500,
        content={
            "error": UNEXPECTED_ERROR_MESSAGE,
            "code": "internal_server_error",
            "request_id": rid,
        },
    )


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs method, route, status, duration and client of each request.

    Level by status class: 5xx → ERROR, 4xx → WARNING, otherwise INFO.
    /health is skipped; monitors hit it every few seconds.

    An exception escaping the route is logged with its traceback and turned
    into a 500 here, so the response still passes back through the request-id
    and CORS layers.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()

        # request.client is None under some test transports
        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        rid = request_id_var.get("")

        if request.url.path == "/health":
            return await call_next(request)

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                "[%s] Unexpected error on %s %s: %s",
                rid,
                method,
                request.url.path,
                str(exc),
                exc_info=True,
            )
            response = unexpected_error_response(rid)

        duration_ms = (time.perf_counter() - start_time) * 1000

        # The router records the matched route in the shared scope
        route = request.scope.get("route")
        path = getattr(route, "path", None) or request.url.path

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
