"""
Report endpoints.

Fixed paths are declared before ``/{report_id}`` so they are not captured as ids.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from app.core.database import get_db
from app.features.auth.dependencies import CurrentTenant
from app.features.reports.pdf import render_report_pdf
from app.features.reports.schemas import (
    InsightsRequest,
    InsightsResponse,
    PdfRenderRequest,
    ReportConfigData,
    ReportDetail,
    ReportGenerateRequest,
    ReportListItem,
    ReportRead,
    WasteTypesRequest,
    WasteTypesResponse,
)
from app.features.reports.service import report_service
from app.features.reports.wizard import WizardValidateRequest, WizardValidation, validate_step

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("", response_model=list[ReportListItem])
async def list_reports(
    ctx: CurrentTenant,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[ReportListItem]:
    """Tenant reports, newest first."""
    return await report_service.list_reports(db, ctx.tenant_id)


@router.post("/generate", response_model=ReportRead, status_code=status.HTTP_201_CREATED)
async def generate_report(
    data: ReportGenerateRequest,
    ctx: CurrentTenant,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ReportRead:
    return await report_service.generate(db, data, ctx.tenant_id, ctx.user_id)


@router.get("/config-data", response_model=ReportConfigData)
async def get_config_data(
    ctx: CurrentTenant,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ReportConfigData:
    """Clients and master questions for the report wizard."""
    return await report_service.config_data(db, ctx.tenant_id)


@router.post("/waste-types", response_model=WasteTypesResponse)
async def get_waste_types_for_period(
    data: WasteTypesRequest,
    ctx: CurrentTenant,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> WasteTypesResponse:
    waste_types = await report_service.waste_types_in_period(db, data, ctx.tenant_id)
    return WasteTypesResponse(waste_types=waste_types)


@router.post("/generate-insights", response_model=InsightsResponse)
async def generate_insights(
    data: InsightsRequest,
    ctx: CurrentTenant,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> InsightsResponse:
    """AI-drafted answers for the wizard's questions. Nothing is saved."""
    answers = await report_service.generate_insights(db, data, ctx.tenant_id)
    return InsightsResponse(questions=answers)


@router.post("/wizard/validate", response_model=WizardValidation)
async def validate_wizard_step(
    data: WizardValidateRequest,
    ctx: CurrentTenant,
) -> WizardValidation:
    """Validate one wizard step against the draft collected so far."""
    return validate_step(data.step, data.data)


@router.get("/{report_id}", response_model=ReportDetail)
async def get_report(
    report_id: str,
    ctx: CurrentTenant,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ReportDetail:
    """Stored KPIs plus the recycling log for the report's window."""
    return await report_service.get_detail(db, report_id, ctx.tenant_id)


async def _pdf_response(report: ReportDetail, body: PdfRenderRequest | None) -> Response:
    content = await run_in_threadpool(render_report_pdf, report, body.charts if body else None)
    filename = f"carbon-report-{report.start_date.isoformat()}-{report.end_date.isoformat()}.pdf"
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/{report_id}/pdf")
async def download_report_pdf(
    report_id: str,
    ctx: CurrentTenant,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Response:
    report = await report_service.get_detail(db, report_id, ctx.tenant_id)
    return await _pdf_response(report, None)


@router.post("/{report_id}/pdf")
async def render_report_pdf_with_charts(
    report_id: str,
    body: PdfRenderRequest,
    ctx: CurrentTenant,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Response:
    """Same document, using chart images rendered by the caller."""
    report = await report_service.get_detail(db, report_id, ctx.tenant_id)
    return await _pdf_response(report, body)
