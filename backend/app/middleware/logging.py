"""
Tutorials API — Access Log Middleware
=======================================

What:  One log line per request: method, original URL and elapsed seconds.
When:  Written once the response body has been fully sent to the client,
       for every request whatever its outcome (2xx, 404, unhandled error).
How:   The response returned by call_next gets a background task; Starlette
       runs it after the last body chunk goes out.

Log line:
    GET /tutorials?page=1&size=3 completed in 0.004 seconds

What we log vs what we DON'T log:
    Log: method, path + query string, status, duration, request ID
    Don't log: request bodies or headers
"""

import logging
import time

from starlette.background import BackgroundTask
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.middleware.request_id import request_id_var

logger = logging.getLogger("tutorials.access")


def original_url(request: Request) -> str:
    """Path plus query string, as the client sent it."""
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path


def log_request(method: str, url: str, status: int, start_time: float, rid: str) -> None:
    """Emit the access log line; level follows the status class."""
    elapsed = time.perf_counter() - start_time

    if status >= 500:
        log_level = logging.ERROR
    elif status >= 400:
        log_level = logging.WARNING
    else:
        log_level = logging.INFO

    logger.log(
        log_level,
        "%s %s completed in %s seconds",
        method,
        url,
        round(elapsed, 6),
        extra={
            "request_id": rid,
            "method": method,
            "url": url,
            "status": status,
            "duration_seconds": elapsed,
        },
    )


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs every request after its response has been sent."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()
        method = request.method
        url = original_url(request)

        try:
            response = await call_next(request)
        except Exception:
            # Unhandled errors become a 500 further out; log before propagating
            log_request(method, url, 500, start_time, request_id_var.get(""))
            raise

        response.background = BackgroundTask(
            log_request, method, url, response.status_code, start_time, request_id_var.get("")
        )
        return response
