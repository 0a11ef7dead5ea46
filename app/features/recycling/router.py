"""
Recycling process endpoint.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.features.auth.dependencies import CurrentTenant
from app.features.recycling.schemas import RecyclingProcessCreate, RecyclingProcessResult
from app.features.recycling.service import recycling_service
from app.features.waste_data.schemas import RecyclingProcessRead

router = APIRouter(prefix="/recycling-processes", tags=["Recycling"])


@router.post("", response_model=RecyclingProcessResult, status_code=status.HTTP_201_CREATED)
async def create_recycling_process(
    data: RecyclingProcessCreate,
    ctx: CurrentTenant,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> RecyclingProcessResult:
    """
    Record recycled kilograms against a waste entry.

    Rejected with 400 when the entry's running total would exceed its quantity.
    """
    process, entry = await recycling_service.record_process(db, data, ctx.tenant_id)
    return RecyclingProcessResult(
        process=RecyclingProcessRead.model_validate(process),
        recycled_quantity=entry.recycled_quantity,
        quantity=entry.quantity,
        status=entry.status,
    )
