"""
Logistics endpoints.
"""

from fastapi import APIRouter

from app.features.auth.dependencies import CurrentUser
from app.features.logistics.schemas import DistanceRequest, DistanceResponse
from app.features.logistics.service import calculate_distance

router = APIRouter(prefix="/logistics", tags=["Logistics"])


@router.post("/calculate-distance", response_model=DistanceResponse)
async def calculate_distance_endpoint(
    data: DistanceRequest,
    current_user: CurrentUser,
) -> DistanceResponse:
    return await calculate_distance(data.origin, data.destination)
