"""
Request middleware.

CorrelationMiddleware binds a correlation id for the lifetime of a request
and echoes it back; RequestLoggingMiddleware logs one line per request with
its status and elapsed time. Health checks are logged at DEBUG.

Dependencies: fastapi, starlette, docchat.observability.correlation
System role: Request/response observability injection
"""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from docchat.observability.correlation import bind_correlation_id, reset_correlation_id

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"
PROCESS_TIME_HEADER = "X-Process-Time-Ms"
QUIET_PATH_SUFFIXES = ("/health",)


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Per-request access log with timing."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        route = f"{request.method} {request.url.path}"
        level = logging.DEBUG if request.url.path.endswith(QUIET_PATH_SUFFIXES) else logging.INFO
        client = request.client.host if request.client else "-"

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                f"{__name__}:dispatch - {route} failed after {_elapsed_ms(started)}ms "
                f"{type(e).__name__}: {e}",
                exc_info=True,
            )
            raise

        elapsed = _elapsed_ms(started)
        response.headers[PROCESS_TIME_HEADER] = str(elapsed)
        logger.log(
            level,
            f"{__name__}:dispatch - {route} -> {response.status_code} in {elapsed}ms client={client}",
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Bind X-Correlation-ID (or a generated id) and return it on the response."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        correlation_id, token = bind_correlation_id(request.headers.get(CORRELATION_HEADER))
        try:
            response = await call_next(request)
        finally:
            reset_correlation_id(token)
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
