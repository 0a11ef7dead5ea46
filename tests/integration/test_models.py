"""
Integration tests for database models.

Tests ORM behavior, relationships, and database constraints.
"""

import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from app.models import RecyclingProcess, User, WasteCategory, WasteData, WasteStatus
from tests.factories import (
    CatalogFactory,
    ClientFactory,
    TenantFactory,
    UserFactory,
    WasteDataFactory,
)


@pytest.mark.integration
class TestTenantModel:
    """Test Tenant model database operations."""

    async def test_create_tenant(self, db_session):
        tenant = await TenantFactory.create(db_session, company_name="Test Company")

        assert tenant.id is not None
        assert len(tenant.id) == 36
        assert tenant.company_name == "Test Company"
        assert tenant.is_active is True
        assert tenant.created_at is not None

    async def test_tenant_cascade_delete(self, db_session):
        """Deleting a tenant removes its users."""
        tenant = await TenantFactory.create(db_session)
        user = await UserFactory.create(db_session, tenant)

        await db_session.delete(tenant)
        await db_session.commit()

        result = await db_session.execute(select(User).where(User.id == user.id))
        assert result.scalar_one_or_none() is None


@pytest.mark.integration
class TestUserModel:
    """Test User model database operations."""

    async def test_email_unique(self, db_session, test_tenant):
        await UserFactory.create(db_session, test_tenant, email="dupe@ecosolutions.com")

        with pytest.raises(IntegrityError):
            await UserFactory.create(db_session, test_tenant, email="dupe@ecosolutions.com")
        await db_session.rollback()

    async def test_role_properties(self, admin_user, super_admin):
        assert admin_user.is_super_admin is False
        assert admin_user.home_path == "/dashboard"
        assert super_admin.is_super_admin is True
        assert super_admin.tenant_id is None
        assert super_admin.home_path == "/superadmin/dashboard"


@pytest.mark.integration
class TestCatalogModel:

    async def test_category_name_unique(self, db_session):
        db_session.add(WasteCategory(name="Plastics"))
        await db_session.commit()

        db_session.add(WasteCategory(name="Plastics"))
        with pytest.raises(IntegrityError):
            await db_session.commit()
        await db_session.rollback()

    async def test_waste_type_loads_category(self, db_session):
        waste_type = await CatalogFactory.create_waste_type(db_session, name="PET Bottles", category_name="Plastics")

        assert waste_type.category.name == "Plastics"


@pytest.mark.integration
class TestWasteDataModel:

    async def test_defaults(self, db_session, test_tenant):
        client = await ClientFactory.create(db_session, test_tenant)
        waste_type = await CatalogFactory.create_waste_type(db_session)

        entry = await WasteDataFactory.create(db_session, client, waste_type)

        assert entry.recycled_quantity == 0.0
        assert entry.status == WasteStatus.PARTIALLY_RECYCLED.value
        assert entry.image_urls == []

    async def test_image_urls_round_trip(self, db_session, test_tenant):
        client = await ClientFactory.create(db_session, test_tenant)
        waste_type = await CatalogFactory.create_waste_type(db_session)

        entry = await WasteDataFactory.create(
            db_session, client, waste_type, image_urls=["/uploads/a.png", "/uploads/b.jpg"]
        )

        assert entry.image_urls == ["/uploads/a.png", "/uploads/b.jpg"]

    async def test_deleting_entry_removes_processes(self, db_session, test_tenant):
        client = await ClientFactory.create(db_session, test_tenant)
        waste_type = await CatalogFactory.create_waste_type(db_session)
        entry = await WasteDataFactory.create(db_session, client, waste_type)
        process = await WasteDataFactory.add_process(db_session, entry, 10.0, entry.recycled_date)

        await db_session.delete(entry)
        await db_session.commit()

        result = await db_session.execute(select(RecyclingProcess).where(RecyclingProcess.id == process.id))
        assert result.scalar_one_or_none() is None
        assert (await db_session.get(WasteData, entry.id)) is None
