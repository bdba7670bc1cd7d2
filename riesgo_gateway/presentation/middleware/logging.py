"""Access logging and HTTP metrics middleware."""

import time
from typing import Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from riesgo_gateway.core.config import settings
from riesgo_gateway.core.metrics import record_http_request

logger = structlog.get_logger(__name__)

# Probe and scrape traffic is counted but not logged
QUIET_PATHS = frozenset({"/metrics", "/api/health"})


def _endpoint_label(request: Request) -> str:
    """Route template when matched, so metric labels stay bounded."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs each bureau query request and records HTTP metrics.

    The request ID comes from the structlog context bound by
    RequestContextMiddleware.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        quiet = request.url.path in QUIET_PATHS
        log = logger.bind(method=request.method, path=request.url.path)

        if not quiet:
            log.info("request_started")

        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        except Exception as e:
            log.error(
                "request_failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            raise
        finally:
            duration = time.perf_counter() - start_time
            if not quiet:
                log.info(
                    "request_completed",
                    status_code=status_code,
                    duration_ms=round(duration * 1000, 2),
                )
            if settings.metrics_enabled:
                record_http_request(
                    request.method,
                    _endpoint_label(request),
                    status_code,
                    duration,
                )
