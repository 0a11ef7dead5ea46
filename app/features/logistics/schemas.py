"""
Logistics schemas.
"""

from pydantic import Field

from app.schemas.common import BaseSchema


class DistanceRequest(BaseSchema):
    origin: str = Field(..., min_length=1)
    destination: str = Field(..., min_length=1)


class DistanceResponse(BaseSchema):
    distance_km: float
    mock: bool
