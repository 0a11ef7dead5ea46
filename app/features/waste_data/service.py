"""
Waste entry business logic.

Quantities are normalized to kilograms on every write. Reference ids are
resolved against global catalogs (waste types, technologies) or against the
caller's tenant (client, facility, pickup location, vehicle type).
"""

from typing import Sequence

import structlog
from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.config import settings
from app.core.exceptions import IntegrityViolationError, ResourceNotFoundError, ValidationError
from app.core.metrics import waste_entries_created_total
from app.core.tenant import get_owned_or_404, tenant_scoped_query
from app.features.waste_data.schemas import (
    RecyclingProcessRead,
    WasteDataCreate,
    WasteDataDetail,
    WasteDataRead,
    WasteDataUpdate,
)
from app.features.waste_data.storage import (
    StorageBackend,
    generate_file_path,
    validate_image_filename,
)
from app.models.catalog import RecyclingTechnology, WasteType
from app.models.client import Client
from app.models.logistics import Facility, PickupLocation, VehicleType
from app.models.waste import (
    QUANTITY_EPSILON,
    WasteData,
    WasteStatus,
    WasteUnit,
    status_for,
    to_kilograms,
)

logger = structlog.get_logger(__name__)

_TENANT_REFS = (
    ("facility_id", Facility, "Facility"),
    ("pickup_location_id", PickupLocation, "Pickup location"),
    ("vehicle_type_id", VehicleType, "Vehicle type"),
)


class WasteDataService:
    """Create, list, update and delete waste entries."""

    @staticmethod
    async def _check_references(db: AsyncSession, values: dict, tenant_id: str) -> None:
        """
        Raises:
            ResourceNotFoundError: a referenced row is missing or belongs to another tenant
        """
        if values.get("waste_type_id") and await db.get(WasteType, values["waste_type_id"]) is None:
            raise ResourceNotFoundError("Waste type not found")

        tech_id = values.get("recycling_technology_id")
        if tech_id and await db.get(RecyclingTechnology, tech_id) is None:
            raise ResourceNotFoundError("Recycling technology not found")

        for field, model, label in _TENANT_REFS:
            if values.get(field):
                await get_owned_or_404(db, model, values[field], tenant_id, label=label)

    @staticmethod
    async def _store_images(
        storage: StorageBackend,
        tenant_id: str,
        groups: Sequence[Sequence[UploadFile]],
    ) -> list[str]:
        for files in groups:
            if len(files) > settings.max_images_per_field:
                raise ValidationError(
                    f"At most {settings.max_images_per_field} images per field are allowed"
                )

        uploads = [f for files in groups for f in files if f.filename]
        extensions = [validate_image_filename(f.filename) for f in uploads]

        urls = []
        for upload, ext in zip(uploads, extensions):
            if upload.size is not None and upload.size > settings.max_upload_size:
                raise ValidationError(f"Image '{upload.filename}' exceeds the upload size limit")
            path = await storage.save(upload.file, generate_file_path(tenant_id, ext))
            urls.append(storage.get_url(path))
        return urls

    @staticmethod
    async def create_entry(
        db: AsyncSession,
        data: WasteDataCreate,
        tenant_id: str,
        user_id: str,
        storage: StorageBackend,
        waste_images: Sequence[UploadFile] = (),
        recycling_images: Sequence[UploadFile] = (),
    ) -> WasteData:
        """
        Record a waste entry; ``data.quantity`` is converted from ``data.unit`` to kg.

        Raises:
            ResourceNotFoundError: client or a reference is not visible to the tenant
            ValidationError: bad images
        """
        client = await get_owned_or_404(db, Client, data.client_id, tenant_id, label="Client")
        await WasteDataService._check_references(db, data.model_dump(), tenant_id)

        image_urls = await WasteDataService._store_images(
            storage, tenant_id, [list(waste_images), list(recycling_images)]
        )

        entry = WasteData(
            **data.model_dump(exclude={"quantity", "unit", "client_id"}),
            client_id=client.id,
            tenant_id=client.tenant_id,
            created_by_id=user_id,
            quantity=to_kilograms(data.quantity, data.unit),
            unit=data.unit.value,
            recycled_quantity=0.0,
            status=WasteStatus.PARTIALLY_RECYCLED.value,
            image_urls=image_urls,
        )
        db.add(entry)
        await db.commit()
        await db.refresh(entry)

        waste_entries_created_total.labels(unit=data.unit.value).inc()
        logger.info(
            "waste_entry_created",
            waste_data_id=entry.id,
            client_id=client.id,
            quantity_kg=entry.quantity,
            images=len(image_urls),
        )
        return entry

    @staticmethod
    async def list_for_client(
        db: AsyncSession,
        client_id: str,
        tenant_id: str,
    ) -> list[WasteDataDetail]:
        await get_owned_or_404(db, Client, client_id, tenant_id, label="Client")

        result = await db.execute(
            tenant_scoped_query(WasteData, tenant_id)
            .where(WasteData.client_id == client_id)
            .options(selectinload(WasteData.recycling_processes))
            .execution_options(populate_existing=True)
            .order_by(WasteData.recycled_date.desc(), WasteData.created_at.desc())
        )
        return [WasteDataService.to_detail(e) for e in result.scalars().all()]

    @staticmethod
    def to_detail(entry: WasteData) -> WasteDataDetail:
        return WasteDataDetail(
            **WasteDataRead.model_validate(entry).model_dump(),
            waste_type_name=entry.waste_type.name,
            waste_category_name=entry.waste_type.category.name,
            recycling_technology_name=(
                entry.recycling_technology.name if entry.recycling_technology else None
            ),
            recycling_processes=[
                RecyclingProcessRead.model_validate(p) for p in entry.recycling_processes
            ],
        )

    @staticmethod
    async def update_entry(
        db: AsyncSession,
        entry_id: str,
        data: WasteDataUpdate,
        tenant_id: str,
    ) -> WasteData:
        """
        Partially update an entry.

        Raises:
            ResourceNotFoundError: entry not visible to the tenant
            IntegrityViolationError: quantity change on a fully recycled entry, or
                new quantity below what was already recycled
        """
        entry = await get_owned_or_404(db, WasteData, entry_id, tenant_id, label="Waste entry")
        values = data.model_dump(exclude_unset=True)
        await WasteDataService._check_references(db, values, tenant_id)

        quantity = values.pop("quantity", None)
        unit = values.pop("unit", None)

        if unit is not None and quantity is None:
            raise ValidationError("Provide the quantity when changing the unit")

        if quantity is not None:
            unit = WasteUnit(unit or entry.unit)
            new_kg = to_kilograms(quantity, unit)

            if entry.status == WasteStatus.FULLY_RECYCLED and abs(new_kg - entry.quantity) > QUANTITY_EPSILON:
                raise IntegrityViolationError(
                    "Cannot change the quantity of a fully recycled waste entry."
                )
            if new_kg < entry.recycled_quantity - QUANTITY_EPSILON:
                raise IntegrityViolationError(
                    "Quantity cannot be less than the amount already recycled."
                )

            entry.quantity = new_kg
            entry.unit = unit.value
            if entry.status != WasteStatus.FULLY_RECYCLED:
                entry.status = status_for(entry.quantity, entry.recycled_quantity).value

        for field, value in values.items():
            setattr(entry, field, value)

        await db.commit()
        await db.refresh(entry)
        logger.info("waste_entry_updated", waste_data_id=entry.id, fields=sorted(data.model_fields_set))
        return entry

    @staticmethod
    async def delete_entry(
        db: AsyncSession,
        entry_id: str,
        tenant_id: str,
        storage: StorageBackend,
    ) -> None:
        """Delete an entry, its recycling processes and its stored images."""
        entry = await get_owned_or_404(db, WasteData, entry_id, tenant_id, label="Waste entry")
        image_urls = list(entry.image_urls or [])

        await db.delete(entry)
        await db.commit()

        for url in image_urls:
            path = storage.path_from_url(url)
            if path:
                await storage.delete(path)

        logger.info("waste_entry_deleted", waste_data_id=entry_id, images=len(image_urls))

    @staticmethod
    async def get_with_names(db: AsyncSession, entry_id: str, tenant_id: str) -> WasteDataDetail:
        result = await db.execute(
            tenant_scoped_query(WasteData, tenant_id)
            .where(WasteData.id == entry_id)
            .options(selectinload(WasteData.recycling_processes))
            .execution_options(populate_existing=True)
        )
        entry = result.scalar_one_or_none()
        if entry is None:
            raise ResourceNotFoundError("Waste entry not found")
        return WasteDataService.to_detail(entry)


waste_data_service = WasteDataService()
