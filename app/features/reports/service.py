"""
Report generation pipeline.

"Activity in period" has one definition used everywhere in this module: a
recycling process dated inside ``[start_date, end_date]`` (inclusive),
recorded against a waste entry of the client whose type is in the included
set (every type when the set is empty).
"""

import re
from datetime import date, datetime, timezone

import structlog
from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.exceptions import ResourceNotFoundError
from app.core.metrics import reports_generated_total
from app.core.performance import PerformanceMonitor
from app.core.tenant import get_owned_or_404, tenant_scoped_query
from app.features.master_data.service import master_data_service
from app.features.reports.kpis import compute_kpis
from app.features.reports.schemas import (
    InsightAnswer,
    InsightsRequest,
    RecyclingLogItem,
    ReportClient,
    ReportConfigData,
    ReportDetail,
    ReportGenerateRequest,
    ReportListItem,
    ReportRead,
    WasteTypesRequest,
)
from app.integrations import gemini
from app.models.catalog import WasteType
from app.models.client import Client
from app.models.report import Report, ReportQuestion
from app.models.waste import RecyclingProcess, WasteData
from app.schemas.common import NamedRef

logger = structlog.get_logger(__name__)

FALLBACK_ANSWER = "Could not generate an answer for this question."

_NUMBERED_LINE = re.compile(r"^\s*(\d+)\s*[.):](?:\s+|$)(.*)$")
_BULLET = re.compile(r"^\s*[-*•]\s*")


def activity_query(
    client_id: str,
    tenant_id: str,
    start_date: date,
    end_date: date,
    waste_type_ids: list[str] | None = None,
) -> Select:
    """``(RecyclingProcess, WasteData)`` rows with activity in the window."""
    stmt = (
        select(RecyclingProcess, WasteData)
        .join(WasteData, RecyclingProcess.waste_data_id == WasteData.id)
        .where(
            WasteData.client_id == client_id,
            WasteData.tenant_id == tenant_id,
            RecyclingProcess.recycled_date >= start_date,
            RecyclingProcess.recycled_date <= end_date,
        )
    )
    if waste_type_ids:
        stmt = stmt.where(WasteData.waste_type_id.in_(waste_type_ids))
    return stmt


def parse_answers(text: str, count: int) -> list[str]:
    """
    Map model output onto ``count`` answers.

    Numbered lines (``2. ...``) answer the question with that number, and
    unnumbered lines after one continue its answer. Output without numbering
    is mapped by position: line ``i`` answers question ``i``. Missing or empty
    answers get ``FALLBACK_ANSWER`` and the answers after them keep their place.
    """
    lines = text.strip("\n").splitlines()
    matches = [_NUMBERED_LINE.match(line) for line in lines]
    answers = [""] * count

    if any(matches):
        current = None
        for line, match in zip(lines, matches):
            if match:
                number = int(match.group(1))
                current = number - 1 if 1 <= number <= count else None
                if current is not None:
                    answers[current] = match.group(2).strip()
            elif current is not None and line.strip():
                answers[current] = f"{answers[current]} {line.strip()}".strip()
    else:
        for i, line in enumerate(lines[:count]):
            answers[i] = _BULLET.sub("", line).strip()

    return [answer or FALLBACK_ANSWER for answer in answers]


def build_insights_prompt(
    client_name: str,
    start_date: date,
    end_date: date,
    total_kg: float,
    questions: list[str],
) -> str:
    numbered = "\n".join(f"{i}. {q}" for i, q in enumerate(questions, start=1))
    return (
        "You are a sustainability analyst writing the insights section of a carbon "
        "emissions report for waste management activities.\n"
        f"Client: {client_name}\n"
        f"Reporting period: {start_date.isoformat()} to {end_date.isoformat()}\n"
        f"Total weight recycled in the period: {total_kg:.2f} kg\n\n"
        "Answer each of the following questions in two or three sentences. "
        "Write each answer on its own single line, starting with the number of "
        "its question (for example \"2. ...\"), without repeating the question.\n\n"
        f"{numbered}"
    )


class ReportService:
    """Generate, list and fetch carbon reports."""

    @staticmethod
    async def _activity(
        db: AsyncSession,
        client_id: str,
        tenant_id: str,
        start_date: date,
        end_date: date,
        waste_type_ids: list[str] | None,
    ) -> list[tuple[RecyclingProcess, WasteData]]:
        result = await db.execute(
            activity_query(client_id, tenant_id, start_date, end_date, waste_type_ids)
            .order_by(RecyclingProcess.recycled_date, RecyclingProcess.created_at)
        )
        return [tuple(row) for row in result.all()]

    @staticmethod
    async def _get_report(db: AsyncSession, report_id: str, tenant_id: str) -> Report:
        result = await db.execute(
            tenant_scoped_query(Report, tenant_id)
            .where(Report.id == report_id)
            .options(selectinload(Report.questions), selectinload(Report.client))
            .execution_options(populate_existing=True)
        )
        report = result.scalar_one_or_none()
        if report is None:
            raise ResourceNotFoundError("Report not found.")
        return report

    @staticmethod
    async def generate(
        db: AsyncSession,
        data: ReportGenerateRequest,
        tenant_id: str,
        user_id: str,
    ) -> ReportRead:
        """
        Aggregate the window, compute KPIs and persist the report with its questions.

        Raises:
            ResourceNotFoundError: client not owned by the tenant
        """
        client = await get_owned_or_404(db, Client, data.client_id, tenant_id, label="Client")

        async with PerformanceMonitor("report_generation", client_id=client.id):
            rows = await ReportService._activity(
                db, client.id, tenant_id, data.start_date, data.end_date, data.included_waste_type_ids
            )
            total_kg = sum(process.quantity_recycled for process, _ in rows)
            entries = {entry.id: entry for _, entry in rows}
            kpis = compute_kpis(total_kg, (e.distance_km for e in entries.values()))

            report = Report(
                client_id=client.id,
                tenant_id=tenant_id,
                created_by_id=user_id,
                report_title=data.report_title,
                start_date=data.start_date,
                end_date=data.end_date,
                included_waste_type_ids=list(data.included_waste_type_ids),
                generated_at=datetime.now(timezone.utc),
                questions=[
                    ReportQuestion(
                        question_text=q.question_text,
                        answer_text=q.answer_text,
                        position=i,
                    )
                    for i, q in enumerate(data.questions)
                ],
                **kpis.as_dict(),
            )
            db.add(report)
            await db.commit()

        reports_generated_total.inc()
        logger.info(
            "report_generated",
            report_id=report.id,
            client_id=client.id,
            entries=len(entries),
            total_weight_recycled=kpis.total_weight_recycled,
        )
        return ReportRead.model_validate(await ReportService._get_report(db, report.id, tenant_id))

    @staticmethod
    async def list_reports(db: AsyncSession, tenant_id: str) -> list[ReportListItem]:
        result = await db.execute(
            select(Report, Client.company_name)
            .join(Client, Report.client_id == Client.id)
            .where(Report.tenant_id == tenant_id)
            .order_by(Report.generated_at.desc())
        )
        return [
            ReportListItem(
                id=report.id,
                client_id=report.client_id,
                client_company_name=company_name,
                report_title=report.report_title,
                start_date=report.start_date,
                end_date=report.end_date,
                generated_at=report.generated_at,
                total_weight_recycled=report.total_weight_recycled,
                net_impact=report.net_impact,
            )
            for report, company_name in result.all()
        ]

    @staticmethod
    async def config_data(db: AsyncSession, tenant_id: str) -> ReportConfigData:
        clients = await db.execute(
            tenant_scoped_query(Client, tenant_id).order_by(Client.company_name)
        )
        return ReportConfigData.model_validate({
            "clients": list(clients.scalars().all()),
            "questions": await master_data_service.list_active_questions(db),
        }, from_attributes=True)

    @staticmethod
    async def waste_types_in_period(
        db: AsyncSession,
        data: WasteTypesRequest,
        tenant_id: str,
    ) -> list[NamedRef]:
        """Distinct waste types with activity in the window, by name."""
        await get_owned_or_404(db, Client, data.client_id, tenant_id, label="Client")

        activity = activity_query(data.client_id, tenant_id, data.start_date, data.end_date)
        result = await db.execute(
            select(WasteType.id, WasteType.name)
            .where(WasteType.id.in_(activity.with_only_columns(WasteData.waste_type_id)))
            .order_by(WasteType.name)
        )
        return [NamedRef(id=type_id, name=name) for type_id, name in result.all()]

    @staticmethod
    async def get_detail(db: AsyncSession, report_id: str, tenant_id: str) -> ReportDetail:
        """
        Stored report plus a freshly queried recycling log over its window.

        KPIs are returned as stored, never recomputed.
        """
        report = await ReportService._get_report(db, report_id, tenant_id)
        rows = await ReportService._activity(
            db,
            report.client_id,
            tenant_id,
            report.start_date,
            report.end_date,
            report.included_waste_type_ids,
        )
        log = [
            RecyclingLogItem(
                process_id=process.id,
                waste_data_id=entry.id,
                recycled_date=process.recycled_date,
                quantity_recycled=process.quantity_recycled,
                waste_type_name=entry.waste_type.name,
                waste_category_name=entry.waste_type.category.name,
                recycling_technology_name=(
                    entry.recycling_technology.name if entry.recycling_technology else None
                ),
                pickup_date=entry.pickup_date,
                distance_km=entry.distance_km,
            )
            for process, entry in rows
        ]
        return ReportDetail(
            **ReportRead.model_validate(report).model_dump(),
            client=ReportClient.model_validate(report.client),
            recycling_log=log,
        )

    @staticmethod
    async def generate_insights(
        db: AsyncSession,
        data: InsightsRequest,
        tenant_id: str,
    ) -> list[InsightAnswer]:
        """
        Ask the language model to answer the report questions. Nothing is stored.

        Raises:
            ResourceNotFoundError: client not owned by the tenant
            ExternalServiceError: the model call failed
        """
        client = await get_owned_or_404(db, Client, data.client_id, tenant_id, label="Client")
        rows = await ReportService._activity(
            db, client.id, tenant_id, data.start_date, data.end_date, data.included_waste_type_ids
        )
        total_kg = sum(process.quantity_recycled for process, _ in rows)

        prompt = build_insights_prompt(
            client.company_name,
            data.start_date,
            data.end_date,
            total_kg,
            [q.text for q in data.questions],
        )
        text = await gemini.generate_content(prompt)
        answers = parse_answers(text, len(data.questions))

        logger.info("insights_generated", client_id=client.id, questions=len(answers))
        return [
            InsightAnswer(id=q.id, text=q.text, answer_text=answer)
            for q, answer in zip(data.questions, answers)
        ]


report_service = ReportService()
