"""
Pickup-to-facility distance.
"""

import random

import structlog

from app.features.logistics.schemas import DistanceResponse
from app.integrations import maps

logger = structlog.get_logger(__name__)

MOCK_RANGE_KM = (10.0, 100.0)


def mock_distance() -> DistanceResponse:
    return DistanceResponse(distance_km=round(random.uniform(*MOCK_RANGE_KM), 2), mock=True)


async def calculate_distance(origin: str, destination: str) -> DistanceResponse:
    """Road distance, or a random mock distance when the maps API is unavailable."""
    distance = await maps.driving_distance_km(origin, destination)
    if distance is None:
        result = mock_distance()
        logger.warning("distance_mocked", distance_km=result.distance_km)
        return result
    return DistanceResponse(distance_km=distance, mock=False)
