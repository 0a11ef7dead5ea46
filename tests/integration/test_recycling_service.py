"""
Integration tests for recording recycling processes.
"""

from datetime import date

import pytest
from sqlalchemy import func, select, update

from app.core.exceptions import IntegrityViolationError, ResourceNotFoundError
from app.features.recycling.schemas import RecyclingProcessCreate
from app.features.recycling.service import OVER_ALLOCATION, recycling_service
from app.models import RecyclingProcess, WasteData, WasteStatus
from tests.factories import CatalogFactory, ClientFactory, WasteDataFactory


@pytest.fixture
async def entry(db_session, test_tenant):
    client = await ClientFactory.create(db_session, test_tenant)
    waste_type = await CatalogFactory.create_waste_type(db_session)
    return await WasteDataFactory.create(db_session, client, waste_type, quantity=100.0)


def process(entry, quantity: float, on: date = date(2025, 3, 1)) -> RecyclingProcessCreate:
    return RecyclingProcessCreate(waste_data_id=entry.id, quantity_recycled=quantity, recycled_date=on)


async def count_processes(db_session, entry) -> int:
    result = await db_session.execute(
        select(func.count(RecyclingProcess.id)).where(RecyclingProcess.waste_data_id == entry.id)
    )
    return result.scalar_one()


@pytest.mark.integration
class TestRecordProcess:
    """Recycled totals never exceed the entry quantity."""

    async def test_partial_then_rejected_then_full(self, db_session, test_tenant, entry):
        _, updated = await recycling_service.record_process(db_session, process(entry, 60), test_tenant.id)
        assert updated.recycled_quantity == pytest.approx(60)
        assert updated.status == WasteStatus.PARTIALLY_RECYCLED.value

        with pytest.raises(IntegrityViolationError, match=OVER_ALLOCATION):
            await recycling_service.record_process(db_session, process(entry, 45), test_tenant.id)

        recorded, updated = await recycling_service.record_process(db_session, process(entry, 40), test_tenant.id)
        assert recorded.quantity_recycled == 40
        assert updated.recycled_quantity == pytest.approx(100)
        assert updated.status == WasteStatus.FULLY_RECYCLED.value
        assert await count_processes(db_session, entry) == 2

    async def test_exact_quantity_in_one_go(self, db_session, test_tenant, entry):
        _, updated = await recycling_service.record_process(db_session, process(entry, 100), test_tenant.id)

        assert updated.status == WasteStatus.FULLY_RECYCLED.value

    async def test_fully_recycled_entry_rejects_more(self, db_session, test_tenant, entry):
        await recycling_service.record_process(db_session, process(entry, 100), test_tenant.id)

        with pytest.raises(IntegrityViolationError):
            await recycling_service.record_process(db_session, process(entry, 0.5), test_tenant.id)
        assert await count_processes(db_session, entry) == 1

    async def test_rounding_slack_accepted(self, db_session, test_tenant, entry):
        await recycling_service.record_process(db_session, process(entry, 33.3333), test_tenant.id)
        await recycling_service.record_process(db_session, process(entry, 33.3333), test_tenant.id)
        _, updated = await recycling_service.record_process(db_session, process(entry, 33.3339), test_tenant.id)

        assert updated.status == WasteStatus.FULLY_RECYCLED.value

    async def test_other_tenant_cannot_record(self, db_session, other_tenant, entry):
        with pytest.raises(ResourceNotFoundError):
            await recycling_service.record_process(db_session, process(entry, 10), other_tenant.id)
        assert await count_processes(db_session, entry) == 0

    async def test_concurrent_write_rejected_by_database_check(self, db_session, test_tenant, entry):
        # Another writer advances the row without touching the loaded ``entry``,
        # so only the conditional UPDATE can see the new total.
        await db_session.execute(
            update(WasteData)
            .where(WasteData.id == entry.id)
            .values(recycled_quantity=90.0)
            .execution_options(synchronize_session=False)
        )
        await db_session.commit()
        assert entry.recycled_quantity == 0

        with pytest.raises(IntegrityViolationError, match=OVER_ALLOCATION):
            await recycling_service.record_process(db_session, process(entry, 20), test_tenant.id)

        await db_session.refresh(entry)
        assert entry.recycled_quantity == pytest.approx(90)
        assert entry.status == WasteStatus.PARTIALLY_RECYCLED.value
        assert await count_processes(db_session, entry) == 0
