"""
Request observability middleware.

CorrelationMiddleware binds an X-Correlation-ID (client-supplied or new)
for the lifetime of a request and echoes it back. RequestLoggingMiddleware
logs one line per request and response, tagged with that id and whether the
caller sent X-User-Id, and reports the handling time in X-Process-Time-Ms.
Health checks are logged at DEBUG so load balancers do not flood the log.

Dependencies: fastapi, starlette, dreamgen.observability
System role: Request/response observability injection
"""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from dreamgen.observability.correlation import (
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
)

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"
PROCESS_TIME_HEADER = "X-Process-Time-Ms"
QUIET_PATH_SUFFIXES = ("/health", "/health/db")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request with timing; must run inside CorrelationMiddleware."""

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        level = logging.DEBUG if path.endswith(QUIET_PATH_SUFFIXES) else logging.INFO
        context = {
            "method": request.method,
            "path": path,
            "correlation_id": get_correlation_id(),
            "signed_in": bool(request.headers.get("X-User-Id")),
        }
        logger.log(level, f"{request.method} {path}", extra=context)

        start = time.perf_counter()
        try:
            response: Response = await call_next(request)
        except Exception as e:
            logger.exception(
                f"{request.method} {path} - Exception",
                extra={
                    **context,
                    "process_time_ms": round((time.perf_counter() - start) * 1000, 2),
                    "error_type": type(e).__name__,
                },
            )
            raise

        elapsed_ms = round((time.perf_counter() - start) * 1000, 2)
        response.headers[PROCESS_TIME_HEADER] = str(elapsed_ms)
        logger.log(
            level,
            f"{request.method} {path} - {response.status_code}",
            extra={**context, "status_code": response.status_code, "process_time_ms": elapsed_ms},
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Binds the correlation id for the request and echoes it in the response."""

    async def dispatch(self, request: Request, call_next):
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_HEADER))
        try:
            response: Response = await call_next(request)
        finally:
            clear_correlation_id()
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
