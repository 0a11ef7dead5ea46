"""
External data endpoints.
"""

from typing import Any

from fastapi import APIRouter

from app.features.auth.dependencies import CurrentUser
from app.features.external_data.service import get_global_sustainability

router = APIRouter(tags=["External Data"])


@router.get("/global-sustainability")
async def global_sustainability(current_user: CurrentUser) -> dict[str, Any]:
    """
    World time series (CO2, renewable share, PM2.5, forest area) and the
    latest CO2 value per country, largest emitters first.
    """
    return await get_global_sustainability()
