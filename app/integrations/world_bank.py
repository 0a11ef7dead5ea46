"""
World Bank indicators API client.

Indicator series come back as ``[metadata, rows]``; rows carry
``{"date": "2020", "value": 4.5, "country": {...}, "countryiso3code": "..."}``.
"""

import asyncio

import httpx

from app.config import settings
from app.core.exceptions import ExternalServiceError
from app.integrations.http import request_external

SERVICE = "world_bank"

# Indicator code -> payload key
WORLD_SERIES = {
    "EN.GHG.CO2.MT.CE.AR5": "co2_emissions",
    "EG.FEC.RNEW.ZS": "renewable_energy_share",
    "EN.ATM.PM25.MC.M3": "pm25_exposure",
    "AG.LND.FRST.ZS": "forest_area",
}

COUNTRY_CO2_INDICATOR = "EN.GHG.CO2.MT.CE.AR5"
SERIES_DATE_RANGE = "1990:2023"


async def _fetch_rows(path: str, params: dict) -> list[dict]:
    url = f"{settings.world_bank_base_url}/{path}"
    try:
        response = await request_external(SERVICE, "GET", url, params={"format": "json", **params})
        body = response.json()
    except (httpx.HTTPError, ValueError) as e:
        raise ExternalServiceError(SERVICE, "Failed to fetch global sustainability data") from e

    if not isinstance(body, list) or len(body) < 2 or not isinstance(body[1], list):
        raise ExternalServiceError(SERVICE, "Unexpected response from the World Bank API")
    return body[1]


async def world_series(indicator: str) -> list[dict]:
    """World aggregate as ``[{year, value}]``, oldest first, gaps removed."""
    rows = await _fetch_rows(
        f"country/WLD/indicator/{indicator}",
        {"date": SERIES_DATE_RANGE, "per_page": 100},
    )
    points = [
        {"year": int(r["date"]), "value": round(float(r["value"]), 2)}
        for r in rows
        if r.get("value") is not None
    ]
    return sorted(points, key=lambda p: p["year"])


async def country_snapshot(indicator: str, aggregate_codes: set[str]) -> list[dict]:
    """
    Most recent value per country, aggregates excluded, largest first.
    """
    rows = await _fetch_rows(
        f"country/all/indicator/{indicator}",
        {"mrnev": 1, "per_page": 400},
    )
    snapshot = [
        {
            "country": r["country"]["value"],
            "iso3": r.get("countryiso3code"),
            "year": int(r["date"]),
            "value": round(float(r["value"]), 2),
        }
        for r in rows
        if r.get("value") is not None and r.get("countryiso3code") not in aggregate_codes
    ]
    return sorted(snapshot, key=lambda c: c["value"], reverse=True)


async def aggregate_codes() -> set[str]:
    """ISO3 codes of regions and income groups (``region.value == "Aggregates"``)."""
    rows = await _fetch_rows("country", {"per_page": 400})
    return {
        r["id"]
        for r in rows
        if (r.get("region") or {}).get("value") == "Aggregates"
    }


async def fetch_global_dataset() -> dict:
    """
    All series plus the country CO2 snapshot.

    Raises:
        ExternalServiceError: any underlying request failed
    """
    series = await asyncio.gather(*(world_series(code) for code in WORLD_SERIES))
    aggregates = await aggregate_codes()
    countries = await country_snapshot(COUNTRY_CO2_INDICATOR, aggregates)

    return {
        **dict(zip(WORLD_SERIES.values(), series)),
        "country_co2": countries,
    }
