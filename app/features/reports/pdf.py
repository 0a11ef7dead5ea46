"""
Carbon report PDF rendering.

Layout: cover page, table of contents, then one section per page
(executive summary, methodology, KPIs, charts, insights, recycling log,
glossary and disclaimer). Every page after the cover carries a header with
the client and period and a page number footer.
"""

import base64
import binascii
import io
from xml.sax.saxutils import escape

import structlog
from reportlab.graphics.charts.barcharts import VerticalBarChart
from reportlab.graphics.charts.piecharts import Pie
from reportlab.graphics.shapes import Drawing, String
from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.lib.utils import ImageReader
from reportlab.platypus import (
    Image as RLImage,
    PageBreak,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from app.features.reports.schemas import ChartImages, ReportDetail

logger = structlog.get_logger(__name__)

PRIMARY = colors.HexColor("#2E7D32")
ACCENT = colors.HexColor("#1976D2")
MUTED = colors.HexColor("#5a6778")
LIGHT = colors.HexColor("#E8F5E9")

SECTIONS = (
    "1. Executive Summary",
    "2. Methodology",
    "3. Key Performance Indicators",
    "4. Data Visualizations",
    "5. Insights & Analysis",
    "6. Appendix & Disclaimer",
)

GLOSSARY = (
    (
        "CO2e (Carbon Dioxide Equivalent)",
        "A standard unit for measuring carbon footprints. It converts the impact of "
        "different greenhouse gases into the equivalent amount of carbon dioxide.",
    ),
    (
        "Waste Diversion Rate",
        "The percentage of total waste generated by an organization that is diverted "
        "from landfill disposal through recycling, composting, or reuse.",
    ),
    (
        "Net GHG Emissions",
        "The final balance of emissions after subtracting the total avoided emissions "
        "from the total direct emissions generated by waste management activities.",
    ),
)

DISCLAIMER = (
    "The calculations and equivalencies presented in this report are based on a "
    "combination of submitted data and established, publicly available conversion "
    "factors. These figures are provided for estimation and communication purposes. "
    "This report is not an official GHG inventory and has not been verified by a "
    "third-party auditor. For official carbon accounting or compliance purposes, a "
    "formal third-party verification is recommended."
)

METHODOLOGY = (
    (
        "GHG Assessment Framework",
        "The GHG emission assessment in this report was conducted using internationally "
        "recognized methodologies and emission factors. The framework is consistent with "
        "the GHG Protocol Corporate Value Chain (Scope 3) Standard and ISO 14064-1 guidelines.",
    ),
    (
        "Emission Calculation",
        "Direct emissions from logistics and processing, and avoided emissions from "
        "virgin material substitution, were quantified for every recycling process in "
        "the reporting period. Net impact equals avoided emissions minus logistics and "
        "recycling emissions.",
    ),
)


def _styles() -> dict[str, ParagraphStyle]:
    base = getSampleStyleSheet()
    return {
        "cover_title": ParagraphStyle(
            "CoverTitle", parent=base["Title"], fontSize=28, leading=34,
            textColor=PRIMARY, alignment=TA_CENTER, spaceAfter=12,
        ),
        "cover_sub": ParagraphStyle(
            "CoverSub", parent=base["Heading2"], textColor=MUTED, alignment=TA_CENTER,
        ),
        "cover_client": ParagraphStyle(
            "CoverClient", parent=base["Heading1"], fontSize=22, alignment=TA_CENTER,
            spaceBefore=48,
        ),
        "centered": ParagraphStyle("Centered", parent=base["Normal"], alignment=TA_CENTER),
        "h1": ParagraphStyle(
            "H1", parent=base["Heading1"], textColor=PRIMARY, spaceAfter=16,
        ),
        "h2": ParagraphStyle(
            "H2", parent=base["Heading2"], textColor=ACCENT, spaceBefore=10, spaceAfter=6,
        ),
        "body": ParagraphStyle("Body", parent=base["BodyText"], leading=15, spaceAfter=8),
        "small": ParagraphStyle("Small", parent=base["Italic"], fontSize=8, textColor=MUTED),
    }


def _decode_data_url(data_url: str | None) -> io.BytesIO | None:
    if not data_url:
        return None
    _, _, encoded = data_url.partition("base64,")
    try:
        image = io.BytesIO(base64.b64decode(encoded or data_url, validate=True))
        ImageReader(image).getSize()
    except (binascii.Error, OSError, ValueError):
        logger.warning("report_chart_image_invalid")
        return None
    image.seek(0)
    return image


def _emissions_bar_chart(report: ReportDetail) -> Drawing:
    drawing = Drawing(6 * inch, 3 * inch)
    chart = VerticalBarChart()
    chart.x, chart.y = 50, 40
    chart.width, chart.height = 5 * inch, 2.2 * inch
    chart.data = [(
        report.emissions_avoided,
        report.logistics_emissions,
        report.recycling_emissions,
        report.net_impact,
    )]
    chart.categoryAxis.categoryNames = ["Avoided", "Logistics", "Recycling", "Net"]
    chart.valueAxis.valueMin = min(0, report.net_impact)
    chart.bars[0].fillColor = PRIMARY
    drawing.add(chart)
    drawing.add(String(0, 3 * inch - 12, "Emissions Overview (kg CO2e)", fontSize=10, fillColor=MUTED))
    return drawing


def _process_pie_chart(report: ReportDetail) -> Drawing:
    drawing = Drawing(6 * inch, 3 * inch)
    values = [report.logistics_emissions, report.recycling_emissions]
    if sum(values) <= 0:
        drawing.add(String(0, 1.5 * inch, "No process emissions in this period.", fontSize=10))
        return drawing

    pie = Pie()
    pie.x, pie.y = 2 * inch, 20
    pie.width = pie.height = 2.2 * inch
    pie.data = values
    pie.labels = ["Logistics", "Recycling"]
    pie.slices[0].fillColor = ACCENT
    pie.slices[1].fillColor = PRIMARY
    drawing.add(pie)
    drawing.add(String(0, 3 * inch - 12, "Process Emissions (kg CO2e)", fontSize=10, fillColor=MUTED))
    return drawing


def _chart(image_url: str | None, fallback) -> object:
    image = _decode_data_url(image_url)
    if image is not None:
        return RLImage(image, width=6 * inch, height=3 * inch)
    return fallback


def _table(rows: list[list], col_widths: list[float], header_color=PRIMARY) -> Table:
    table = Table(rows, colWidths=col_widths, repeatRows=1)
    table.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), header_color),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 9),
        ("BOTTOMPADDING", (0, 0), (-1, 0), 8),
        ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, LIGHT]),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor("#BDBDBD")),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
    ]))
    return table


def render_report_pdf(report: ReportDetail, charts: ChartImages | None = None) -> bytes:
    """Render ``report`` to PDF bytes; ``charts`` overrides the drawn charts."""
    charts = charts or ChartImages()
    styles = _styles()
    client_name = escape(report.client.company_name)
    period = f"{report.start_date.isoformat()} to {report.end_date.isoformat()}"
    header_text = f"Report for {report.client.company_name} | {period}"

    story = [
        Spacer(1, 2 * inch),
        Paragraph("CARBON EMISSION REPORT", styles["cover_title"]),
        Paragraph("FOR WASTE MANAGEMENT ACTIVITIES", styles["cover_sub"]),
        Paragraph(client_name, styles["cover_client"]),
        Spacer(1, 12),
        Paragraph(escape(report.report_title), styles["centered"]),
        Paragraph(f"Reporting period: {period}", styles["centered"]),
        Paragraph(f"Generated: {report.generated_at:%Y-%m-%d}", styles["centered"]),
        PageBreak(),
        Paragraph("Table of Contents", styles["h1"]),
        *[Paragraph(section, styles["body"]) for section in SECTIONS],
        PageBreak(),
    ]

    story += [
        Paragraph(SECTIONS[0], styles["h1"]),
        Paragraph(
            f"This report summarizes the waste management and recycling activities of "
            f"<b>{client_name}</b> for the period {period}.",
            styles["body"],
        ),
        Paragraph(
            f"During this period, a total of <b>{report.total_weight_recycled} kg</b> of "
            f"materials were recycled, achieving a waste diversion rate of "
            f"<b>{report.diversion_rate}%</b>. These efforts resulted in a net reduction of "
            f"greenhouse gas emissions totaling <b>{report.net_impact} kg of CO2 equivalent "
            f"(CO2e)</b>.",
            styles["body"],
        ),
        Paragraph(
            f"This impact is equivalent to taking approximately "
            f"<b>{report.cars_off_road_equivalent}</b> passenger cars off the road for a year.",
            styles["body"],
        ),
        PageBreak(),
        Paragraph(SECTIONS[1], styles["h1"]),
    ]
    for heading, text in METHODOLOGY:
        story += [Paragraph(heading, styles["h2"]), Paragraph(text, styles["body"])]

    kpi_cells = [
        ("Total Weight Recycled", f"{report.total_weight_recycled} kg"),
        ("Waste Diversion Rate", f"{report.diversion_rate}%"),
        ("Net CO2e Impact", f"{report.net_impact} kg"),
        ("Cars Off-Road (Annual Equiv.)", f"{report.cars_off_road_equivalent}"),
        ("Trees Saved (Equivalent)", f"{report.trees_saved}"),
        ("Landfill Space Saved", f"{report.landfill_space_saved} m3"),
        ("Emissions Avoided", f"{report.emissions_avoided} kg"),
        ("Total Waste Generated", f"{report.total_waste_generated} kg"),
    ]
    story += [
        PageBreak(),
        Paragraph(SECTIONS[2], styles["h1"]),
        _table([["Indicator", "Value"], *[list(c) for c in kpi_cells]], [3.5 * inch, 2.5 * inch]),
        PageBreak(),
        Paragraph(SECTIONS[3], styles["h1"]),
        Paragraph("Emissions Overview", styles["h2"]),
        Paragraph(
            "Avoided emissions represent GHG savings; logistics and recycling represent "
            "the emissions generated during the process.",
            styles["body"],
        ),
        _chart(charts.emissions_overview, _emissions_bar_chart(report)),
        Paragraph("Process Emissions", styles["h2"]),
        _chart(charts.process_emissions, _process_pie_chart(report)),
        PageBreak(),
        Paragraph(SECTIONS[4], styles["h1"]),
    ]

    if not report.questions:
        story.append(Paragraph("No questions were included in this report.", styles["body"]))
    for question in report.questions:
        story += [
            Paragraph(escape(question.question_text), styles["h2"]),
            Paragraph(
                escape(question.answer_text or "No answer provided for this question."),
                styles["body"],
            ),
        ]

    story += [PageBreak(), Paragraph(SECTIONS[5], styles["h1"]), Paragraph("Recycling Log", styles["h2"])]
    if report.recycling_log:
        rows = [["Date", "Waste Type", "Category", "Technology", "kg"]]
        rows += [
            [
                item.recycled_date.isoformat(),
                item.waste_type_name,
                item.waste_category_name,
                item.recycling_technology_name or "-",
                f"{item.quantity_recycled:.2f}",
            ]
            for item in report.recycling_log
        ]
        story.append(_table(rows, [1.0 * inch, 1.5 * inch, 1.3 * inch, 1.5 * inch, 0.9 * inch], ACCENT))
    else:
        story.append(Paragraph("No recycling activity recorded in this period.", styles["body"]))

    story.append(Paragraph("Glossary of Terms", styles["h2"]))
    for term, definition in GLOSSARY:
        story.append(Paragraph(f"<b>{term}:</b> {definition}", styles["body"]))
    story += [Spacer(1, 12), Paragraph(DISCLAIMER, styles["small"])]

    def draw_page_chrome(canvas, document) -> None:
        canvas.saveState()
        canvas.setFont("Helvetica", 8)
        canvas.setFillColor(MUTED)
        canvas.drawString(document.leftMargin, A4[1] - 40, header_text)
        canvas.drawRightString(
            A4[0] - document.rightMargin,
            24,
            f"Page {canvas.getPageNumber()}",
        )
        canvas.restoreState()

    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=60,
        rightMargin=60,
        topMargin=64,
        bottomMargin=48,
        title=report.report_title,
        author="WasteTrack",
    )
    doc.build(story, onLaterPages=draw_page_chrome)

    logger.info("report_pdf_rendered", report_id=report.id, log_rows=len(report.recycling_log))
    return buffer.getvalue()
