"""Request/response logging middleware with timing."""

import time
from typing import Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from src.core.config import settings
from src.core.metrics import record_http_request
from .request_context import get_request_id

logger = structlog.get_logger(__name__)


def _endpoint_label(request: Request) -> str:
    """Route template (e.g. /v1/work-orders/{work_order_id}/receivables) for metric labels."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


class LoggingMiddleware(BaseHTTPMiddleware):
    """Logs request start, completion, and duration."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        method = request.method
        path = request.url.path
        query = str(request.query_params) if request.query_params else None

        log = logger.bind(
            request_id=get_request_id(),
            method=method,
            path=path,
        )

        log.info("request_started", query=query)

        try:
            response = await call_next(request)
            duration = time.perf_counter() - start_time

            log.info(
                "request_completed",
                status_code=response.status_code,
                duration_ms=round(duration * 1000, 2),
            )

            if settings.metrics_enabled and path != "/metrics":
                record_http_request(method, _endpoint_label(request), response.status_code, duration)

            return response

        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000

            log.error(
                "request_failed",
                error=str(e),
                error_type=type(e).__name__,
                duration_ms=round(duration_ms, 2),
            )
            raise
