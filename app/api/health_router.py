"""
Health check endpoints for monitoring and orchestration.

Provides:
- Liveness probe: Is the app running?
- Readiness probe: Can the app reach the database?
- Detailed health check: database status, cache state, version
"""

import time
from typing import Any

import structlog
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from sqlalchemy import text

from app.config import settings
from app.core.database import db_manager
from app.features.external_data.service import global_data_cache

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Health"])


async def _check_database() -> dict[str, Any]:
    start = time.perf_counter()
    try:
        async for db in db_manager.get_session():
            await db.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning("health_database_unreachable", error=str(e))
        return {"status": "unhealthy", "error": str(e)}
    return {
        "status": "healthy",
        "response_time_ms": round((time.perf_counter() - start) * 1000, 2),
    }


@router.get("/health/live")
async def liveness() -> dict:
    """
    Liveness probe.

    Returns:
        200: Application is running
    """
    return {"status": "alive"}


@router.get("/health/ready")
async def readiness() -> JSONResponse:
    """
    Readiness probe.

    Returns:
        200: Ready to serve traffic
        503: Database unavailable
    """
    database = await _check_database()
    is_ready = database["status"] == "healthy"

    return JSONResponse(
        status_code=status.HTTP_200_OK if is_ready else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "ready" if is_ready else "not_ready",
            "checks": {"database": database},
        },
    )


@router.get("/health")
async def health() -> dict:
    """Detailed health check with dependency status."""
    database = await _check_database()
    cache_entry = global_data_cache.entry

    return {
        "status": "healthy" if database["status"] == "healthy" else "degraded",
        "version": settings.app_version,
        "environment": settings.environment,
        "checks": {
            "database": database,
            "global_data_cache": {
                "populated": cache_entry is not None,
                "fresh": global_data_cache.is_fresh(),
            },
        },
    }
