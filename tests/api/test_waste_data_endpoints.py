"""
API tests for waste entries and recycling processes.
"""

import threading
from io import BytesIO

import pytest
from httpx import AsyncClient
from openpyxl import load_workbook

from app.features.waste_data import router as waste_data_router
from tests.factories import CatalogFactory, ClientFactory, WasteDataFactory

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


@pytest.fixture
async def waste_client(db_session, test_tenant):
    return await ClientFactory.create(db_session, test_tenant, company_name="Global Tech Corp")


@pytest.fixture
async def waste_type(db_session):
    return await CatalogFactory.create_waste_type(db_session, name="Cardboard", category_name="Paper")


def entry_form(client_id: str, waste_type_id: str, **overrides) -> dict:
    form = {
        "client_id": client_id,
        "waste_type_id": waste_type_id,
        "quantity": "2",
        "unit": "T",
        "recycled_date": "2025-03-10",
        "pickup_date": "2025-03-01",
        "distance_km": "",
    }
    form.update(overrides)
    return form


@pytest.mark.api
class TestCreateWasteEntry:
    """Multipart entry form."""

    async def test_create_converts_to_kilograms(self, client: AsyncClient, admin_headers, waste_client, waste_type):
        response = await client.post(
            "/api/waste-data",
            data=entry_form(waste_client.id, waste_type.id),
            headers=admin_headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["quantity"] == 2000.0
        assert data["unit"] == "T"
        assert data["recycled_quantity"] == 0.0
        assert data["status"] == "PARTIALLY_RECYCLED"
        assert data["waste_type_name"] == "Cardboard"
        assert data["waste_category_name"] == "Paper"
        assert data["distance_km"] is None

    async def test_create_with_images(
        self, client: AsyncClient, admin_headers, waste_client, waste_type, storage, test_tenant
    ):
        response = await client.post(
            "/api/waste-data",
            data=entry_form(waste_client.id, waste_type.id),
            files=[
                ("wasteImages", ("bin.png", PNG, "image/png")),
                ("wasteImages", ("bale.PNG", PNG, "image/png")),
                ("recyclingImages", ("pellets.jpg", b"jpeg-bytes", "image/jpeg")),
            ],
            headers=admin_headers,
        )

        assert response.status_code == 201
        urls = response.json()["image_urls"]
        assert len(urls) == 3
        for url in urls:
            assert url.startswith(f"/uploads/{test_tenant.id}/")
            assert await storage.exists(storage.path_from_url(url))

    async def test_rejects_non_image(self, client: AsyncClient, admin_headers, waste_client, waste_type):
        response = await client.post(
            "/api/waste-data",
            data=entry_form(waste_client.id, waste_type.id),
            files=[("wasteImages", ("notes.txt", b"hello", "text/plain"))],
            headers=admin_headers,
        )

        assert response.status_code == 400

    async def test_rejects_too_many_images(self, client: AsyncClient, admin_headers, waste_client, waste_type):
        response = await client.post(
            "/api/waste-data",
            data=entry_form(waste_client.id, waste_type.id),
            files=[("wasteImages", (f"img{i}.png", PNG, "image/png")) for i in range(6)],
            headers=admin_headers,
        )

        assert response.status_code == 400

    async def test_rejects_non_positive_quantity(self, client: AsyncClient, admin_headers, waste_client, waste_type):
        response = await client.post(
            "/api/waste-data",
            data=entry_form(waste_client.id, waste_type.id, quantity="0"),
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["detail"].startswith("quantity:")

    async def test_unknown_waste_type(self, client: AsyncClient, admin_headers, waste_client):
        response = await client.post(
            "/api/waste-data",
            data=entry_form(waste_client.id, "missing-type"),
            headers=admin_headers,
        )

        assert response.status_code == 404

    async def test_other_tenant_client_is_404(self, client: AsyncClient, other_headers, waste_client, waste_type):
        response = await client.post(
            "/api/waste-data",
            data=entry_form(waste_client.id, waste_type.id),
            headers=other_headers,
        )

        assert response.status_code == 404


@pytest.mark.api
class TestWasteEntryLifecycle:

    async def test_list_for_client(self, client: AsyncClient, db_session, admin_headers, waste_client, waste_type):
        await WasteDataFactory.create(db_session, waste_client, waste_type, quantity=10.0)
        await WasteDataFactory.create(db_session, waste_client, waste_type, quantity=20.0)

        response = await client.get(f"/api/waste-data/{waste_client.id}", headers=admin_headers)

        assert response.status_code == 200
        assert sorted(e["quantity"] for e in response.json()) == [10.0, 20.0]

    async def test_list_other_tenant_client_is_404(self, client: AsyncClient, other_headers, waste_client):
        response = await client.get(f"/api/waste-data/{waste_client.id}", headers=other_headers)

        assert response.status_code == 404

    async def test_update_quantity(self, client: AsyncClient, db_session, admin_headers, waste_client, waste_type):
        entry = await WasteDataFactory.create(db_session, waste_client, waste_type, quantity=100.0)

        response = await client.put(
            f"/api/waste-data/{entry.id}",
            json={"quantity": 500, "unit": "G"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["quantity"] == 0.5
        assert response.json()["unit"] == "G"

    async def test_unit_change_requires_quantity(
        self, client: AsyncClient, db_session, admin_headers, waste_client, waste_type
    ):
        entry = await WasteDataFactory.create(db_session, waste_client, waste_type)

        response = await client.put(f"/api/waste-data/{entry.id}", json={"unit": "LB"}, headers=admin_headers)

        assert response.status_code == 400

    async def test_quantity_below_recycled_rejected(
        self, client: AsyncClient, db_session, admin_headers, waste_client, waste_type
    ):
        entry = await WasteDataFactory.create(db_session, waste_client, waste_type, quantity=100.0, recycled_quantity=60.0)

        response = await client.put(f"/api/waste-data/{entry.id}", json={"quantity": 50}, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "Quantity cannot be less than the amount already recycled."

    async def test_fully_recycled_quantity_locked(
        self, client: AsyncClient, db_session, admin_headers, waste_client, waste_type
    ):
        entry = await WasteDataFactory.create(
            db_session,
            waste_client,
            waste_type,
            quantity=100.0,
            recycled_quantity=100.0,
            status="FULLY_RECYCLED",
        )

        response = await client.put(f"/api/waste-data/{entry.id}", json={"quantity": 150}, headers=admin_headers)
        assert response.status_code == 400

        response = await client.put(f"/api/waste-data/{entry.id}", json={"distance_km": 12.5}, headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["distance_km"] == 12.5

    async def test_delete_removes_images(
        self, client: AsyncClient, admin_headers, waste_client, waste_type, storage
    ):
        response = await client.post(
            "/api/waste-data",
            data=entry_form(waste_client.id, waste_type.id),
            files=[("wasteImages", ("bin.png", PNG, "image/png"))],
            headers=admin_headers,
        )
        created = response.json()
        path = storage.path_from_url(created["image_urls"][0])

        response = await client.delete(f"/api/waste-data/{created['id']}", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Waste entry deleted successfully"}
        assert not await storage.exists(path)

    async def test_delete_other_tenant_entry_is_404(
        self, client: AsyncClient, db_session, other_headers, waste_client, waste_type
    ):
        entry = await WasteDataFactory.create(db_session, waste_client, waste_type)

        response = await client.delete(f"/api/waste-data/{entry.id}", headers=other_headers)

        assert response.status_code == 404

    async def test_template(self, client: AsyncClient, admin_headers, waste_type):
        response = await client.get("/api/waste-data/template", headers=admin_headers)

        assert response.status_code == 200
        assert "attachment" in response.headers["content-disposition"]
        workbook = load_workbook(BytesIO(response.content))
        assert "Waste Entries" in workbook.sheetnames
        types_sheet = workbook["Waste Types"]
        values = [cell.value for row in types_sheet.iter_rows() for cell in row]
        assert waste_type.id in values
        assert "Cardboard" in values

    async def test_template_built_in_worker_thread(self, client: AsyncClient, admin_headers, monkeypatch):
        build = waste_data_router.build_template
        threads = []

        def recording_build(**sheets):
            threads.append(threading.current_thread())
            return build(**sheets)

        monkeypatch.setattr(waste_data_router, "build_template", recording_build)

        response = await client.get("/api/waste-data/template", headers=admin_headers)

        assert response.status_code == 200
        assert len(threads) == 1
        assert threads[0] is not threading.main_thread()


@pytest.mark.api
class TestRecyclingProcessEndpoint:

    async def test_sequence(self, client: AsyncClient, db_session, admin_headers, waste_client, waste_type):
        entry = await WasteDataFactory.create(db_session, waste_client, waste_type, quantity=100.0)

        def body(quantity):
            return {"waste_data_id": entry.id, "quantity_recycled": quantity, "recycled_date": "2025-03-15"}

        response = await client.post("/api/recycling-processes", json=body(60), headers=admin_headers)
        assert response.status_code == 201
        assert response.json()["recycled_quantity"] == 60.0
        assert response.json()["status"] == "PARTIALLY_RECYCLED"

        response = await client.post("/api/recycling-processes", json=body(45), headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "Cannot recycle more than the initial quantity of the waste entry."

        response = await client.post("/api/recycling-processes", json=body(40), headers=admin_headers)
        assert response.status_code == 201
        assert response.json()["status"] == "FULLY_RECYCLED"
        assert response.json()["process"]["quantity_recycled"] == 40.0

        response = await client.get(f"/api/waste-data/{waste_client.id}", headers=admin_headers)
        assert len(response.json()[0]["recycling_processes"]) == 2

    async def test_quantity_must_be_positive(self, client: AsyncClient, admin_headers):
        response = await client.post(
            "/api/recycling-processes",
            json={"waste_data_id": "x", "quantity_recycled": 0, "recycled_date": "2025-03-15"},
            headers=admin_headers,
        )

        assert response.status_code == 400

    async def test_other_tenant_entry_is_404(
        self, client: AsyncClient, db_session, other_headers, waste_client, waste_type
    ):
        entry = await WasteDataFactory.create(db_session, waste_client, waste_type)

        response = await client.post(
            "/api/recycling-processes",
            json={"waste_data_id": entry.id, "quantity_recycled": 1, "recycled_date": "2025-03-15"},
            headers=other_headers,
        )

        assert response.status_code == 404
