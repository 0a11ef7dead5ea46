"""
Dashboard endpoints.
"""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.features.auth.dependencies import CurrentTenant, SuperAdmin
from app.features.dashboard.schemas import SuperAdminDashboard, TenantDashboard, Timeframe
from app.features.dashboard.service import dashboard_service

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/tenant", response_model=TenantDashboard)
async def tenant_dashboard(
    ctx: CurrentTenant,
    db: Annotated[AsyncSession, Depends(get_db)],
    timeframe: Timeframe | None = Query(None, description="30d, 3m, 6m, 1y or custom; all time when omitted"),
    start: date | None = Query(None, description="Custom window start"),
    end: date | None = Query(None, description="Custom window end"),
) -> TenantDashboard:
    return await dashboard_service.tenant_dashboard(db, ctx.tenant_id, timeframe, start, end)


@router.get("/superadmin", response_model=SuperAdminDashboard)
async def superadmin_dashboard(
    current_user: SuperAdmin,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> SuperAdminDashboard:
    """Platform totals and one row per tenant."""
    return await dashboard_service.superadmin_dashboard(db)
