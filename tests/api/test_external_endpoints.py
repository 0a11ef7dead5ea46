"""
API tests for endpoints backed by third-party services.
"""

import httpx
import pytest
from httpx import AsyncClient

from app.config import settings
from app.features.external_data.service import global_data_cache


def world_bank_handler(request: httpx.Request) -> httpx.Response:
    """Minimal World Bank API: two years per world series, three countries."""
    path = request.url.path
    if path.endswith("/country"):
        return httpx.Response(200, json=[
            {"page": 1},
            [
                {"id": "WLD", "region": {"value": "Aggregates"}},
                {"id": "USA", "region": {"value": "North America"}},
                {"id": "FRA", "region": {"value": "Europe & Central Asia"}},
            ],
        ])
    if "/country/all/" in path:
        return httpx.Response(200, json=[
            {"page": 1},
            [
                {"country": {"value": "World"}, "countryiso3code": "WLD", "date": "2022", "value": 37000.0},
                {"country": {"value": "France"}, "countryiso3code": "FRA", "date": "2022", "value": 290.123},
                {"country": {"value": "United States"}, "countryiso3code": "USA", "date": "2022", "value": 5000.5},
                {"country": {"value": "Nowhere"}, "countryiso3code": "NWH", "date": "2022", "value": None},
            ],
        ])
    return httpx.Response(200, json=[
        {"page": 1},
        [
            {"date": "2021", "value": 2.4567},
            {"date": "2020", "value": 1.0},
            {"date": "2019", "value": None},
        ],
    ])


@pytest.mark.api
class TestGlobalSustainability:

    async def test_payload(self, client: AsyncClient, member_headers, stub_http):
        stub_http(world_bank_handler)

        response = await client.get("/api/global-sustainability", headers=member_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["source"] == "World Bank Open Data"
        assert data["co2_emissions"] == [{"year": 2020, "value": 1.0}, {"year": 2021, "value": 2.46}]
        assert {"renewable_energy_share", "pm25_exposure", "forest_area"} <= set(data)
        assert [c["iso3"] for c in data["country_co2"]] == ["USA", "FRA"]
        assert data["country_co2"][1]["value"] == 290.12

    async def test_cached_between_requests(self, client: AsyncClient, member_headers, stub_http):
        requests = stub_http(world_bank_handler)

        await client.get("/api/global-sustainability", headers=member_headers)
        calls_after_first = len(requests)
        await client.get("/api/global-sustainability", headers=member_headers)

        assert calls_after_first > 0
        assert len(requests) == calls_after_first

    async def test_stale_payload_when_upstream_fails(self, client: AsyncClient, member_headers, stub_http):
        global_data_cache.set({"co2_emissions": [], "source": "World Bank Open Data"})
        global_data_cache.entry.fetched_at -= settings.global_data_ttl_seconds + 1
        requests = stub_http(lambda request: httpx.Response(502))

        response = await client.get("/api/global-sustainability", headers=member_headers)

        assert response.status_code == 200
        assert response.json()["co2_emissions"] == []
        failed_calls = len(requests)
        assert failed_calls > 0

        response = await client.get("/api/global-sustainability", headers=member_headers)

        assert response.status_code == 200
        assert len(requests) == failed_calls

    async def test_upstream_failure_without_cache(self, client: AsyncClient, member_headers, stub_http):
        stub_http(lambda request: httpx.Response(502))

        response = await client.get("/api/global-sustainability", headers=member_headers)

        assert response.status_code == 500

    async def test_super_admin_allowed(self, client: AsyncClient, super_admin_headers, stub_http):
        stub_http(world_bank_handler)

        response = await client.get("/api/global-sustainability", headers=super_admin_headers)

        assert response.status_code == 200

    async def test_requires_auth(self, client: AsyncClient):
        response = await client.get("/api/global-sustainability")

        assert response.status_code == 401


@pytest.mark.api
class TestDistance:

    async def test_mock_without_api_key(self, client: AsyncClient, member_headers):
        response = await client.post(
            "/api/logistics/calculate-distance",
            json={"origin": "1 Main St", "destination": "10 Industrial Rd"},
            headers=member_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["mock"] is True
        assert 10 <= data["distance_km"] <= 100

    async def test_maps_distance(self, client: AsyncClient, member_headers, stub_http, monkeypatch):
        monkeypatch.setattr(settings, "google_maps_api_key", "maps-key")
        requests = stub_http(lambda request: httpx.Response(200, json={
            "status": "OK",
            "rows": [{"elements": [{"status": "OK", "distance": {"value": 12340}}]}],
        }))

        response = await client.post(
            "/api/logistics/calculate-distance",
            json={"origin": "1 Main St", "destination": "10 Industrial Rd"},
            headers=member_headers,
        )

        assert response.json() == {"distance_km": 12.34, "mock": False}
        assert requests[0].url.params["origins"] == "1 Main St"

    async def test_not_found_route_falls_back_to_mock(self, client: AsyncClient, member_headers, stub_http, monkeypatch):
        monkeypatch.setattr(settings, "google_maps_api_key", "maps-key")
        stub_http(lambda request: httpx.Response(200, json={
            "status": "OK",
            "rows": [{"elements": [{"status": "ZERO_RESULTS"}]}],
        }))

        response = await client.post(
            "/api/logistics/calculate-distance",
            json={"origin": "Atlantis", "destination": "10 Industrial Rd"},
            headers=member_headers,
        )

        assert response.json()["mock"] is True

    async def test_blank_address_rejected(self, client: AsyncClient, member_headers):
        response = await client.post(
            "/api/logistics/calculate-distance",
            json={"origin": "", "destination": "10 Industrial Rd"},
            headers=member_headers,
        )

        assert response.status_code == 400


@pytest.mark.api
class TestTranslate:

    async def test_not_configured(self, client: AsyncClient, member_headers):
        response = await client.post(
            "/api/translate", json={"texts": ["Hello"], "target_lang": "fr"}, headers=member_headers
        )

        assert response.status_code == 400

    async def test_translate(self, client: AsyncClient, member_headers, stub_http, monkeypatch):
        monkeypatch.setattr(settings, "google_project_id", "wastetrack-demo")
        requests = stub_http(lambda request: httpx.Response(200, json={
            "translations": [{"translatedText": "Bonjour"}, {"translatedText": "Tableau de bord"}],
        }))

        response = await client.post(
            "/api/translate",
            json={"texts": ["Hello", "Dashboard"], "target_lang": "fr"},
            headers=member_headers,
        )

        assert response.status_code == 200
        assert response.json() == {"translated_texts": ["Bonjour", "Tableau de bord"]}
        assert requests[0].url.path.endswith("/projects/wastetrack-demo/locations/global:translateText")

    async def test_empty_texts_rejected(self, client: AsyncClient, member_headers):
        response = await client.post("/api/translate", json={"texts": [], "target_lang": "fr"}, headers=member_headers)

        assert response.status_code == 400
