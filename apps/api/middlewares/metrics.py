"""Request duration metrics."""

import time
from collections.abc import Callable

from fastapi import Request, Response, status
from starlette.middleware.base import BaseHTTPMiddleware

from core.metrics import api_request_duration


class MetricsMiddleware(BaseHTTPMiddleware):
    """Observe the duration of every request, labelled by route template."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        started = time.perf_counter()
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            # Unmatched paths share one label
            route = request.scope.get("route")
            endpoint = getattr(route, "path", "unmatched")
            api_request_duration.labels(method=request.method, endpoint=endpoint, status=status_code).observe(
                time.perf_counter() - started
            )
