"""
API tests for tenant and platform dashboards.
"""

from datetime import date, timedelta

import pytest
from httpx import AsyncClient

from tests.factories import CatalogFactory, ClientFactory, WasteDataFactory


@pytest.fixture
async def entries(db_session, test_tenant, other_tenant):
    big = await ClientFactory.create(db_session, test_tenant, company_name="Global Tech Corp")
    small = await ClientFactory.create(db_session, test_tenant, company_name="Local Foods")
    cardboard = await CatalogFactory.create_waste_type(db_session, name="Cardboard", category_name="Paper")
    food = await CatalogFactory.create_waste_type(db_session, name="Food Scraps", category_name="Organic")
    today = date.today()

    await WasteDataFactory.create(
        db_session, big, cardboard, quantity=300.0, recycled_quantity=300.0, pickup_date=today - timedelta(days=5)
    )
    await WasteDataFactory.create(
        db_session, small, food, quantity=100.0, recycled_quantity=40.0, pickup_date=None, recycled_date=today
    )
    # outside every rolling window
    await WasteDataFactory.create(
        db_session, big, food, quantity=50.0, pickup_date=today - timedelta(days=800)
    )

    foreign = await ClientFactory.create(db_session, other_tenant)
    await WasteDataFactory.create(db_session, foreign, cardboard, quantity=999.0, recycled_quantity=999.0)
    return {"big": big, "small": small}


@pytest.mark.api
class TestTenantDashboard:

    async def test_all_time(self, client: AsyncClient, admin_headers, entries):
        response = await client.get("/api/dashboard/tenant", headers=admin_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["start_date"] is None
        assert data["kpis"]["total_clients"] == 2
        assert data["kpis"]["total_waste_entries"] == 3
        assert data["kpis"]["total_recycled_weight"] == 450.0

    async def test_last_30_days(self, client: AsyncClient, admin_headers, entries):
        response = await client.get("/api/dashboard/tenant", params={"timeframe": "30d"}, headers=admin_headers)

        data = response.json()
        assert data["kpis"]["total_waste_entries"] == 2
        assert data["kpis"]["total_recycled_weight"] == 400.0
        # 300 kg cardboard at 2.5 plus 100 kg food scraps at the default 1.5
        assert data["kpis"]["total_emissions_avoided"] == 900.0

        charts = data["charts"]
        assert [row["client_name"] for row in charts["client_leaderboard"]] == ["Global Tech Corp", "Local Foods"]
        assert charts["waste_by_type"][0] == {"name": "Cardboard", "value": 300.0}
        assert {p["name"] for p in charts["waste_by_category"]} == {"Paper", "Organic"}
        assert charts["waste_by_facility"] == [{"name": "Unspecified Facility", "value": 400.0}]
        assert charts["client_waste_breakdown"]["waste_types"] == ["Cardboard", "Food Scraps"]
        assert charts["client_waste_breakdown"]["data"][0] == {
            "client_name": "Global Tech Corp",
            "Cardboard": 300.0,
            "Food Scraps": 0.0,
        }

    async def test_custom_window(self, client: AsyncClient, admin_headers, entries):
        today = date.today()
        response = await client.get(
            "/api/dashboard/tenant",
            params={"timeframe": "custom", "start": today.isoformat(), "end": today.isoformat()},
            headers=admin_headers,
        )

        data = response.json()
        assert data["start_date"] == today.isoformat()
        assert data["kpis"]["total_waste_entries"] == 1
        assert data["charts"]["client_leaderboard"][0]["client_name"] == "Local Foods"

    async def test_custom_window_inverted(self, client: AsyncClient, admin_headers):
        response = await client.get(
            "/api/dashboard/tenant",
            params={"timeframe": "custom", "start": "2025-02-01", "end": "2025-01-01"},
            headers=admin_headers,
        )

        assert response.status_code == 400

    async def test_unknown_timeframe(self, client: AsyncClient, admin_headers):
        response = await client.get("/api/dashboard/tenant", params={"timeframe": "2w"}, headers=admin_headers)

        assert response.status_code == 400

    async def test_empty_tenant(self, client: AsyncClient, other_headers):
        response = await client.get("/api/dashboard/tenant", headers=other_headers)

        assert response.status_code == 200
        assert response.json()["kpis"]["total_waste_entries"] == 0
        assert response.json()["charts"]["client_leaderboard"] == []


@pytest.mark.api
class TestSuperAdminDashboard:

    async def test_platform_totals(
        self, client: AsyncClient, super_admin_headers, entries, admin_user, member_user, test_tenant
    ):
        response = await client.get("/api/dashboard/superadmin", headers=super_admin_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["totals"]["tenants"] == 2
        assert data["totals"]["waste_entries"] == 4

        mine = next(row for row in data["tenants"] if row["tenant_id"] == test_tenant.id)
        assert mine["users"] == 2
        assert mine["clients"] == 2
        assert mine["waste_entries"] == 3
        assert mine["total_recycled_kg"] == 340.0

    async def test_tenant_admin_forbidden(self, client: AsyncClient, admin_headers):
        response = await client.get("/api/dashboard/superadmin", headers=admin_headers)

        assert response.status_code == 403

    async def test_super_admin_has_no_tenant_dashboard(self, client: AsyncClient, super_admin_headers):
        response = await client.get("/api/dashboard/tenant", headers=super_admin_headers)

        assert response.status_code == 403
