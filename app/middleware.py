"""FastAPI middleware for Prometheus metrics instrumentation."""
import time
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from app.metrics import (
    HTTP_REQUESTS_TOTAL,
    HTTP_REQUEST_DURATION_SECONDS,
    HTTP_REQUESTS_IN_PROGRESS,
    HTTP_RESPONSE_SIZE_BYTES,
)


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Middleware to collect HTTP request metrics for Prometheus."""

    # Endpoints to exclude from metrics (like /metrics itself)
    EXCLUDE_PATHS = {"/metrics", "/health", "/ping"}

    # Only known routes get their own label; everything else is grouped
    KNOWN_ENDPOINTS = {
        "/api/deals",
        "/api/deals/peak-time",
        "/debug/snapshot",
        "/debug/restaurants/search",
    }

    async def dispatch(self, request: Request, call_next) -> Response:
        """Process request and collect metrics."""
        path = request.url.path
        method = request.method

        if path in self.EXCLUDE_PATHS:
            return await call_next(request)

        endpoint = self._normalize_endpoint(path)

        HTTP_REQUESTS_IN_PROGRESS.labels(method=method, endpoint=endpoint).inc()
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
            status_code = response.status_code
        except Exception:
            status_code = 500
            raise
        finally:
            duration = time.perf_counter() - start_time
            HTTP_REQUEST_DURATION_SECONDS.labels(
                method=method, endpoint=endpoint
            ).observe(duration)
            HTTP_REQUESTS_IN_PROGRESS.labels(method=method, endpoint=endpoint).dec()
            HTTP_REQUESTS_TOTAL.labels(
                method=method, endpoint=endpoint, status_code=str(status_code)
            ).inc()

        response_size = response.headers.get("content-length")
        if response_size:
            try:
                HTTP_RESPONSE_SIZE_BYTES.labels(
                    method=method, endpoint=endpoint
                ).observe(int(response_size))
            except ValueError:
                pass

        return response

    def _normalize_endpoint(self, path: str) -> str:
        """Map a request path to a bounded set of metric labels."""
        normalized = "/" + path.strip("/")
        if normalized in self.KNOWN_ENDPOINTS:
            return normalized
        return "other"
