"""
Dashboard aggregations.

Tenant dashboards select waste entries by pickup date (falling back to the
recycled date when no pickup date was recorded) and aggregate them in one
pass. The platform dashboard uses grouped counts per tenant.
"""

from collections import defaultdict
from datetime import date, datetime, time, timedelta, timezone

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.exceptions import ValidationError
from app.core.performance import PerformanceMonitor
from app.features.dashboard.schemas import (
    ChartPoint,
    ClientWasteBreakdown,
    LeaderboardRow,
    PlatformTotals,
    SuperAdminDashboard,
    TenantCharts,
    TenantDashboard,
    TenantKPIs,
    TenantSummaryRow,
    Timeframe,
)
from app.models.client import Client
from app.models.report import Report
from app.models.role import UserRole
from app.models.tenant import Tenant
from app.models.user import User
from app.models.waste import WasteData

logger = structlog.get_logger(__name__)

# kg CO2e avoided per kg, matched by substring of the waste type name
EMISSION_FACTORS = {
    "Cardboard": 2.5,
    "PET": 1.8,
    "Aluminum": 9.1,
    "Glass": 0.8,
}
DEFAULT_EMISSION_FACTOR = 1.5

TOP_CLIENTS = 5


def emission_factor(waste_type_name: str) -> float:
    for key, factor in EMISSION_FACTORS.items():
        if key.lower() in waste_type_name.lower():
            return factor
    return DEFAULT_EMISSION_FACTOR


def _months_before(d: date, months: int) -> date:
    month_index = d.year * 12 + (d.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    # Clamp to the last day of the target month
    next_month = date(year + month // 12, month % 12 + 1, 1)
    last_day = (next_month - timedelta(days=1)).day
    return date(year, month, min(d.day, last_day))


def resolve_window(
    timeframe: Timeframe | None,
    start: date | None,
    end: date | None,
    today: date | None = None,
) -> tuple[date | None, date | None]:
    """
    Inclusive ``(start, end)`` for a timeframe; ``(None, None)`` means all time.

    Raises:
        ValidationError: custom window with start after end
    """
    today = today or date.today()
    if timeframe is Timeframe.LAST_30_DAYS:
        return today - timedelta(days=30), today
    if timeframe is Timeframe.LAST_3_MONTHS:
        return _months_before(today, 3), today
    if timeframe is Timeframe.LAST_6_MONTHS:
        return _months_before(today, 6), today
    if timeframe is Timeframe.LAST_YEAR:
        return _months_before(today, 12), today
    if timeframe is Timeframe.CUSTOM and start and end:
        if start > end:
            raise ValidationError("Start date must be on or before end date")
        return start, end
    return None, None


def _chart(values: dict[str, float]) -> list[ChartPoint]:
    points = [ChartPoint(name=name, value=round(v, 2)) for name, v in values.items()]
    return sorted(points, key=lambda p: p.value, reverse=True)


class DashboardService:

    @staticmethod
    async def tenant_dashboard(
        db: AsyncSession,
        tenant_id: str,
        timeframe: Timeframe | None = None,
        start: date | None = None,
        end: date | None = None,
    ) -> TenantDashboard:
        start_date, end_date = resolve_window(timeframe, start, end)

        async with PerformanceMonitor("tenant_dashboard", tenant_id=tenant_id):
            activity_date = func.coalesce(WasteData.pickup_date, WasteData.recycled_date)
            entries_stmt = (
                select(WasteData)
                .where(WasteData.tenant_id == tenant_id)
                .options(selectinload(WasteData.client))
            )
            reports_stmt = select(Report.client_id).where(Report.tenant_id == tenant_id)
            if start_date is not None:
                entries_stmt = entries_stmt.where(activity_date >= start_date, activity_date <= end_date)
                reports_stmt = reports_stmt.where(
                    Report.generated_at >= datetime.combine(start_date, time.min, tzinfo=timezone.utc),
                    Report.generated_at <= datetime.combine(end_date, time.max, tzinfo=timezone.utc),
                )

            entries = list((await db.execute(entries_stmt)).scalars().all())
            report_client_ids = list((await db.execute(reports_stmt)).scalars().all())
            client_count = await db.scalar(
                select(func.count()).select_from(Client).where(Client.tenant_id == tenant_id)
            )

            total_weight = 0.0
            total_emissions = 0.0
            by_type: dict[str, float] = defaultdict(float)
            by_category: dict[str, float] = defaultdict(float)
            by_facility: dict[str, float] = defaultdict(float)
            emissions_by_type: dict[str, float] = defaultdict(float)
            by_month: dict[str, float] = defaultdict(float)
            by_client: dict[str, float] = defaultdict(float)
            client_names: dict[str, str] = {}
            client_type: dict[tuple[str, str], float] = defaultdict(float)

            for entry in entries:
                kg = entry.quantity
                type_name = entry.waste_type.name
                emissions = kg * emission_factor(type_name)

                total_weight += kg
                total_emissions += emissions
                by_type[type_name] += kg
                emissions_by_type[type_name] += emissions
                by_category[entry.waste_type.category.name if entry.waste_type.category else "Uncategorized"] += kg
                by_facility[entry.facility.name if entry.facility else "Unspecified Facility"] += kg
                by_month[(entry.pickup_date or entry.recycled_date).strftime("%Y-%m")] += kg
                by_client[entry.client_id] += kg
                client_names[entry.client_id] = entry.client.company_name
                client_type[(entry.client_id, type_name)] += kg

            reports_per_client: dict[str, int] = defaultdict(int)
            for client_id in report_client_ids:
                reports_per_client[client_id] += 1

            leaderboard = sorted(
                (
                    LeaderboardRow(
                        client_id=client_id,
                        client_name=client_names[client_id],
                        total_weight=round(weight, 2),
                        reports_generated=reports_per_client[client_id],
                    )
                    for client_id, weight in by_client.items()
                ),
                key=lambda row: row.total_weight,
                reverse=True,
            )

            waste_types = sorted(by_type)
            breakdown = [
                {
                    "client_name": row.client_name,
                    **{t: round(client_type[(row.client_id, t)], 2) for t in waste_types},
                }
                for row in leaderboard[:TOP_CLIENTS]
            ]

        return TenantDashboard(
            start_date=start_date,
            end_date=end_date,
            kpis=TenantKPIs(
                total_clients=client_count or 0,
                total_waste_entries=len(entries),
                total_reports_generated=len(report_client_ids),
                total_recycled_weight=round(total_weight, 2),
                total_emissions_avoided=round(total_emissions, 2),
            ),
            charts=TenantCharts(
                client_leaderboard=leaderboard,
                client_waste_breakdown=ClientWasteBreakdown(data=breakdown, waste_types=waste_types),
                monthly_pickup_trend=[
                    ChartPoint(name=month, value=round(v, 2)) for month, v in sorted(by_month.items())
                ],
                waste_by_type=_chart(by_type),
                waste_by_category=_chart(by_category),
                emissions_avoided_breakdown=_chart(emissions_by_type),
                waste_by_facility=_chart(by_facility),
            ),
        )

    @staticmethod
    async def _count_by_tenant(db: AsyncSession, stmt) -> dict[str, int]:
        return {tenant_id: count for tenant_id, count in (await db.execute(stmt)).all()}

    @staticmethod
    async def superadmin_dashboard(db: AsyncSession) -> SuperAdminDashboard:
        async with PerformanceMonitor("superadmin_dashboard"):
            tenants = list((await db.execute(select(Tenant).order_by(Tenant.company_name))).scalars().all())

            users = await DashboardService._count_by_tenant(
                db,
                select(User.tenant_id, func.count())
                .where(User.role != UserRole.SUPER_ADMIN.value, User.tenant_id.is_not(None))
                .group_by(User.tenant_id),
            )
            clients = await DashboardService._count_by_tenant(
                db, select(Client.tenant_id, func.count()).group_by(Client.tenant_id)
            )
            entries = await DashboardService._count_by_tenant(
                db, select(WasteData.tenant_id, func.count()).group_by(WasteData.tenant_id)
            )
            reports = await DashboardService._count_by_tenant(
                db, select(Report.tenant_id, func.count()).group_by(Report.tenant_id)
            )
            recycled = {
                tenant_id: float(kg or 0)
                for tenant_id, kg in (
                    await db.execute(
                        select(WasteData.tenant_id, func.sum(WasteData.recycled_quantity))
                        .group_by(WasteData.tenant_id)
                    )
                ).all()
            }

        rows = [
            TenantSummaryRow(
                tenant_id=t.id,
                company_name=t.company_name,
                is_active=t.is_active,
                users=users.get(t.id, 0),
                clients=clients.get(t.id, 0),
                waste_entries=entries.get(t.id, 0),
                reports=reports.get(t.id, 0),
                total_recycled_kg=round(recycled.get(t.id, 0.0), 2),
            )
            for t in tenants
        ]
        totals = PlatformTotals(
            tenants=len(rows),
            users=sum(r.users for r in rows),
            clients=sum(r.clients for r in rows),
            waste_entries=sum(r.waste_entries for r in rows),
            reports=sum(r.reports for r in rows),
            total_recycled_kg=round(sum(recycled.values()), 2),
        )
        return SuperAdminDashboard(totals=totals, tenants=rows)


dashboard_service = DashboardService()
