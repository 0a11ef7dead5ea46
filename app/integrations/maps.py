"""
Google Distance Matrix client.
"""

import httpx
import structlog

from app.config import settings
from app.integrations.http import request_external

logger = structlog.get_logger(__name__)

SERVICE = "google_maps"


async def driving_distance_km(origin: str, destination: str) -> float | None:
    """
    Road distance in kilometres, rounded to 2 decimals.

    None when no API key is configured, the API reports a non-OK status, or
    the request fails. Callers decide the fallback.
    """
    if not settings.google_maps_api_key:
        return None

    try:
        response = await request_external(
            SERVICE,
            "GET",
            settings.google_maps_base_url,
            params={
                "origins": origin,
                "destinations": destination,
                "key": settings.google_maps_api_key,
            },
        )
        body = response.json()
    except (httpx.HTTPError, ValueError):
        return None

    try:
        element = body["rows"][0]["elements"][0]
        if body.get("status") != "OK" or element.get("status") != "OK":
            logger.warning("distance_matrix_not_ok", status=body.get("status"), element_status=element.get("status"))
            return None
        meters = element["distance"]["value"]
    except (KeyError, IndexError, TypeError):
        logger.warning("distance_matrix_unexpected_body", status=body.get("status") if isinstance(body, dict) else None)
        return None

    return round(meters / 1000, 2)
