"""
Waste entry endpoints.
"""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from app.core.database import get_db
from app.features.auth.dependencies import CurrentTenant
from app.features.master_data.service import master_data_service
from app.features.settings.service import (
    facility_service,
    pickup_location_service,
    vehicle_type_service,
)
from app.features.waste_data.schemas import WasteDataCreate, WasteDataDetail, WasteDataUpdate
from app.features.waste_data.service import waste_data_service
from app.features.waste_data.storage import StorageBackend, get_storage
from app.features.waste_data.template import XLSX_MEDIA_TYPE, build_template
from app.schemas.common import MessageResponse

router = APIRouter(prefix="/waste-data", tags=["Waste Data"])


@router.post("", response_model=WasteDataDetail, status_code=status.HTTP_201_CREATED)
async def create_waste_entry(
    ctx: CurrentTenant,
    db: Annotated[AsyncSession, Depends(get_db)],
    storage: Annotated[StorageBackend, Depends(get_storage)],
    client_id: str = Form(...),
    waste_type_id: str = Form(...),
    quantity: str = Form(..., description="Amount in `unit`"),
    unit: str = Form("KG", description="KG, G, T or LB"),
    recycled_date: str = Form(...),
    pickup_date: str | None = Form(None),
    recycling_technology_id: str | None = Form(None),
    facility_id: str | None = Form(None),
    pickup_location_id: str | None = Form(None),
    vehicle_type_id: str | None = Form(None),
    pickup_address: str | None = Form(None),
    facility_address: str | None = Form(None),
    vehicle_type: str | None = Form(None),
    distance_km: str | None = Form(None),
    waste_images: list[UploadFile] | None = File(None, alias="wasteImages"),
    recycling_images: list[UploadFile] | None = File(None, alias="recyclingImages"),
) -> WasteDataDetail:
    """
    Record a waste entry from the multipart entry form.

    Quantity is stored in kilograms. Up to five images per image field.
    """
    try:
        data = WasteDataCreate.model_validate({
            "client_id": client_id,
            "waste_type_id": waste_type_id,
            "quantity": quantity,
            "unit": unit,
            "recycled_date": recycled_date,
            "pickup_date": pickup_date,
            "recycling_technology_id": recycling_technology_id,
            "facility_id": facility_id,
            "pickup_location_id": pickup_location_id,
            "vehicle_type_id": vehicle_type_id,
            "pickup_address": pickup_address,
            "facility_address": facility_address,
            "vehicle_type": vehicle_type,
            "distance_km": distance_km or None,
        })
    except PydanticValidationError as e:
        raise RequestValidationError(e.errors(include_url=False, include_context=False))

    entry = await waste_data_service.create_entry(
        db,
        data,
        tenant_id=ctx.tenant_id,
        user_id=ctx.user_id,
        storage=storage,
        waste_images=waste_images or [],
        recycling_images=recycling_images or [],
    )
    return await waste_data_service.get_with_names(db, entry.id, ctx.tenant_id)


@router.get("/template")
async def download_template(
    ctx: CurrentTenant,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Response:
    """Spreadsheet for bulk entry, with the ids of every referenceable record."""
    content = await run_in_threadpool(
        build_template,
        categories=await master_data_service.list_categories(db),
        technologies=await master_data_service.list_technologies(db),
        facilities=await facility_service.list_items(db, ctx.tenant_id),
        pickup_locations=await pickup_location_service.list_items(db, ctx.tenant_id),
        vehicle_types=await vehicle_type_service.list_items(db, ctx.tenant_id),
    )
    filename = f"waste-entry-template-{date.today().isoformat()}.xlsx"
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/{client_id}", response_model=list[WasteDataDetail])
async def list_client_waste(
    client_id: str,
    ctx: CurrentTenant,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[WasteDataDetail]:
    """Entries of one client, most recently recycled first."""
    return await waste_data_service.list_for_client(db, client_id, ctx.tenant_id)


@router.put("/{entry_id}", response_model=WasteDataDetail)
async def update_waste_entry(
    entry_id: str,
    data: WasteDataUpdate,
    ctx: CurrentTenant,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> WasteDataDetail:
    entry = await waste_data_service.update_entry(db, entry_id, data, ctx.tenant_id)
    return await waste_data_service.get_with_names(db, entry.id, ctx.tenant_id)


@router.delete("/{entry_id}", response_model=MessageResponse)
async def delete_waste_entry(
    entry_id: str,
    ctx: CurrentTenant,
    db: Annotated[AsyncSession, Depends(get_db)],
    storage: Annotated[StorageBackend, Depends(get_storage)],
) -> MessageResponse:
    await waste_data_service.delete_entry(db, entry_id, ctx.tenant_id, storage)
    return MessageResponse(message="Waste entry deleted successfully")
