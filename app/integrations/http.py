"""
Shared plumbing for third-party HTTP calls.

Every call goes through ``request_external`` so outcome counters and latency
histograms are recorded per service. Tests swap ``transport`` for an
``httpx.MockTransport``.
"""

import time
from typing import Any

import httpx
import structlog

from app.config import settings
from app.core.metrics import external_call_duration_seconds, external_calls_total

logger = structlog.get_logger(__name__)

transport: httpx.AsyncBaseTransport | None = None


def external_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=settings.external_http_timeout, transport=transport)


async def request_external(service: str, method: str, url: str, **kwargs: Any) -> httpx.Response:
    """
    Perform one HTTP request and raise for non-2xx responses.

    Raises:
        httpx.HTTPError: network failure or error status
    """
    start = time.perf_counter()
    try:
        async with external_client() as client:
            response = await client.request(method, url, **kwargs)
            response.raise_for_status()
    except httpx.HTTPError as e:
        external_calls_total.labels(service=service, outcome="error").inc()
        logger.warning("external_call_failed", service=service, error=str(e))
        raise
    finally:
        external_call_duration_seconds.labels(service=service).observe(time.perf_counter() - start)

    external_calls_total.labels(service=service, outcome="success").inc()
    return response
