"""
Read-only access to global catalogs and the tenant's logistics lookups.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.features.master_data.schemas import MasterDataResponse
from app.features.settings.service import (
    facility_service,
    pickup_location_service,
    vehicle_type_service,
)
from app.models.catalog import (
    MasterReportQuestion,
    RecyclingTechnology,
    WasteCategory,
)


class MasterDataService:

    @staticmethod
    async def list_categories(db: AsyncSession) -> list[WasteCategory]:
        """Categories by name, each with its types (also by name)."""
        result = await db.execute(
            select(WasteCategory)
            .options(selectinload(WasteCategory.waste_types))
            .order_by(WasteCategory.name)
        )
        return list(result.scalars().all())

    @staticmethod
    async def list_technologies(db: AsyncSession) -> list[RecyclingTechnology]:
        result = await db.execute(select(RecyclingTechnology).order_by(RecyclingTechnology.name))
        return list(result.scalars().all())

    @staticmethod
    async def list_active_questions(db: AsyncSession) -> list[MasterReportQuestion]:
        result = await db.execute(
            select(MasterReportQuestion)
            .where(MasterReportQuestion.is_active.is_(True))
            .order_by(MasterReportQuestion.display_order, MasterReportQuestion.created_at)
        )
        return list(result.scalars().all())

    @staticmethod
    async def get_master_data(db: AsyncSession, tenant_id: str) -> MasterDataResponse:
        return MasterDataResponse.model_validate({
            "waste_categories": await MasterDataService.list_categories(db),
            "recycling_technologies": await MasterDataService.list_technologies(db),
            "report_questions": await MasterDataService.list_active_questions(db),
            "facilities": await facility_service.list_items(db, tenant_id),
            "pickup_locations": await pickup_location_service.list_items(db, tenant_id),
            "vehicle_types": await vehicle_type_service.list_items(db, tenant_id),
        }, from_attributes=True)


master_data_service = MasterDataService()
