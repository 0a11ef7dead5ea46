"""
Dashboard schemas.
"""

from datetime import date
from enum import Enum
from typing import Any

from app.schemas.common import BaseSchema


class Timeframe(str, Enum):
    LAST_30_DAYS = "30d"
    LAST_3_MONTHS = "3m"
    LAST_6_MONTHS = "6m"
    LAST_YEAR = "1y"
    CUSTOM = "custom"


class ChartPoint(BaseSchema):
    name: str
    value: float


class LeaderboardRow(BaseSchema):
    client_id: str
    client_name: str
    total_weight: float
    reports_generated: int


class ClientWasteBreakdown(BaseSchema):
    """Top clients by weight, with kilograms per waste type name."""

    data: list[dict[str, Any]]
    waste_types: list[str]


class TenantKPIs(BaseSchema):
    total_clients: int
    total_waste_entries: int
    total_reports_generated: int
    total_recycled_weight: float
    total_emissions_avoided: float


class TenantCharts(BaseSchema):
    client_leaderboard: list[LeaderboardRow]
    client_waste_breakdown: ClientWasteBreakdown
    monthly_pickup_trend: list[ChartPoint]
    waste_by_type: list[ChartPoint]
    waste_by_category: list[ChartPoint]
    emissions_avoided_breakdown: list[ChartPoint]
    waste_by_facility: list[ChartPoint]


class TenantDashboard(BaseSchema):
    start_date: date | None = None
    end_date: date | None = None
    kpis: TenantKPIs
    charts: TenantCharts


class PlatformTotals(BaseSchema):
    tenants: int
    users: int
    clients: int
    waste_entries: int
    reports: int
    total_recycled_kg: float


class TenantSummaryRow(BaseSchema):
    tenant_id: str
    company_name: str
    is_active: bool
    users: int
    clients: int
    waste_entries: int
    reports: int
    total_recycled_kg: float


class SuperAdminDashboard(BaseSchema):
    totals: PlatformTotals
    tenants: list[TenantSummaryRow]
