"""
Performance monitoring utilities.
"""

import time
from typing import Any, Callable

import structlog
from fastapi import Request
from starlette.routing import Match

from app.core.metrics import (
    http_request_duration_seconds,
    http_requests_in_progress,
    http_requests_total,
)

logger = structlog.get_logger(__name__)


class PerformanceMonitor:
    """
    Async context manager that logs how long an operation took.

    Usage:
        async with PerformanceMonitor("dashboard_aggregation", tenant_id=tid):
            ...
    """

    def __init__(self, operation_name: str, **tags: Any):
        self.operation_name = operation_name
        self.tags = tags
        self.start_time: float | None = None
        self.end_time: float | None = None

    async def __aenter__(self) -> "PerformanceMonitor":
        self.start_time = time.perf_counter()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self.end_time = time.perf_counter()

        if exc_type is None:
            logger.info(
                "operation_completed",
                operation=self.operation_name,
                duration_ms=round(self.duration_ms, 2),
                **self.tags,
            )
        else:
            logger.error(
                "operation_failed",
                operation=self.operation_name,
                duration_ms=round(self.duration_ms, 2),
                error=str(exc_val),
                **self.tags,
            )

    @property
    def duration_ms(self) -> float | None:
        """Get duration in milliseconds."""
        if self.start_time is not None and self.end_time is not None:
            return (self.end_time - self.start_time) * 1000
        return None


def _route_template(request: Request) -> str:
    """Use the route path template as the metric label so ids don't explode cardinality."""
    for route in request.app.router.routes:
        match, _ = route.matches(request.scope)
        if match == Match.FULL:
            return getattr(route, "path", request.url.path)
    return "unmatched"


async def track_http_metrics(request: Request, call_next: Callable):
    """
    Middleware to track HTTP metrics.

    Records:
    - Request count by endpoint and status
    - Request duration histogram
    - Requests in progress gauge
    """
    endpoint = _route_template(request)
    method = request.method

    http_requests_in_progress.labels(method=method).inc()
    start_time = time.perf_counter()

    try:
        response = await call_next(request)

        http_request_duration_seconds.labels(
            method=method,
            endpoint=endpoint,
        ).observe(time.perf_counter() - start_time)

        http_requests_total.labels(
            method=method,
            endpoint=endpoint,
            status_code=response.status_code,
        ).inc()

        return response

    finally:
        http_requests_in_progress.labels(method=method).dec()
