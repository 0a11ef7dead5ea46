"""
Master data endpoint.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.features.auth.dependencies import CurrentTenant
from app.features.master_data.schemas import MasterDataResponse
from app.features.master_data.service import master_data_service

router = APIRouter(prefix="/master-data", tags=["Master Data"])


@router.get("", response_model=MasterDataResponse)
async def get_master_data(
    ctx: CurrentTenant,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MasterDataResponse:
    """Waste taxonomy, technologies, report questions and tenant logistics lookups."""
    return await master_data_service.get_master_data(db, ctx.tenant_id)
