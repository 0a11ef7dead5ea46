"""
Recording recycling against a waste entry.

The parent's running total is advanced with a single conditional UPDATE, so
two concurrent submissions can never push ``recycled_quantity`` past
``quantity``: the second one matches zero rows and is rolled back.
"""

import structlog
from sqlalchemy import case, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import IntegrityViolationError
from app.core.metrics import recycling_processes_total
from app.core.tenant import get_owned_or_404
from app.features.recycling.schemas import RecyclingProcessCreate
from app.models.waste import (
    QUANTITY_EPSILON,
    RecyclingProcess,
    WasteData,
    WasteStatus,
)

logger = structlog.get_logger(__name__)

OVER_ALLOCATION = "Cannot recycle more than the initial quantity of the waste entry."


class RecyclingService:

    @staticmethod
    async def record_process(
        db: AsyncSession,
        data: RecyclingProcessCreate,
        tenant_id: str,
    ) -> tuple[RecyclingProcess, WasteData]:
        """
        Insert a recycling process and advance the parent entry in one transaction.

        Raises:
            ResourceNotFoundError: entry missing or owned by another tenant
            IntegrityViolationError: the amount would exceed the entry's quantity
        """
        entry = await get_owned_or_404(db, WasteData, data.waste_data_id, tenant_id, label="Waste entry")
        q = data.quantity_recycled

        if entry.recycled_quantity + q > entry.quantity + QUANTITY_EPSILON:
            recycling_processes_total.labels(outcome="rejected").inc()
            raise IntegrityViolationError(OVER_ALLOCATION)

        new_total = WasteData.recycled_quantity + q
        result = await db.execute(
            update(WasteData)
            .where(
                WasteData.id == entry.id,
                WasteData.tenant_id == tenant_id,
                new_total <= WasteData.quantity + QUANTITY_EPSILON,
            )
            .values(
                recycled_quantity=new_total,
                status=case(
                    (WasteData.status == WasteStatus.FULLY_RECYCLED.value, WasteStatus.FULLY_RECYCLED.value),
                    (new_total >= WasteData.quantity - QUANTITY_EPSILON, WasteStatus.FULLY_RECYCLED.value),
                    else_=WasteStatus.PARTIALLY_RECYCLED.value,
                ),
            )
            .execution_options(synchronize_session=False)
        )

        if result.rowcount == 0:
            await db.rollback()
            recycling_processes_total.labels(outcome="conflict").inc()
            logger.warning("recycling_process_conflict", waste_data_id=data.waste_data_id, quantity=q)
            raise IntegrityViolationError(OVER_ALLOCATION)

        process = RecyclingProcess(
            waste_data_id=entry.id,
            quantity_recycled=q,
            recycled_date=data.recycled_date,
        )
        db.add(process)
        await db.commit()
        await db.refresh(process)
        await db.refresh(entry)

        recycling_processes_total.labels(outcome="recorded").inc()
        logger.info(
            "recycling_process_recorded",
            waste_data_id=entry.id,
            quantity=q,
            recycled_quantity=entry.recycled_quantity,
            status=entry.status,
        )
        return process, entry


recycling_service = RecyclingService()
