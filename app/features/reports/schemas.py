"""
Report schemas.
"""

from datetime import date, datetime

from pydantic import Field, model_validator

from app.schemas.common import BaseSchema, NamedRef


class ReportWindow(BaseSchema):
    """Client plus an inclusive date window; shared by several report requests."""

    client_id: str = Field(..., min_length=1)
    start_date: date
    end_date: date

    @model_validator(mode="after")
    def check_window(self) -> "ReportWindow":
        if self.start_date > self.end_date:
            raise ValueError("Start date must be on or before end date")
        return self


class QuestionAnswer(BaseSchema):
    question_text: str = Field(..., min_length=1)
    answer_text: str | None = None


class ReportGenerateRequest(ReportWindow):
    report_title: str = Field(..., min_length=1, max_length=500)
    included_waste_type_ids: list[str] = []
    questions: list[QuestionAnswer] = []


class WasteTypesRequest(ReportWindow):
    pass


class InsightQuestion(BaseSchema):
    id: str
    text: str


class InsightsRequest(ReportWindow):
    included_waste_type_ids: list[str] = []
    questions: list[InsightQuestion] = Field(..., min_length=1)


class InsightAnswer(InsightQuestion):
    answer_text: str


class InsightsResponse(BaseSchema):
    questions: list[InsightAnswer]


class ReportQuestionRead(BaseSchema):
    id: str
    question_text: str
    answer_text: str | None = None
    position: int


class ReportKPIs(BaseSchema):
    total_weight_recycled: float
    total_waste_generated: float
    emissions_avoided: float
    logistics_emissions: float
    recycling_emissions: float
    net_impact: float
    diversion_rate: float
    cars_off_road_equivalent: float
    trees_saved: float
    landfill_space_saved: float


class ReportRead(ReportKPIs):
    id: str
    client_id: str
    tenant_id: str
    report_title: str
    start_date: date
    end_date: date
    included_waste_type_ids: list[str] = []
    generated_at: datetime
    questions: list[ReportQuestionRead] = []


class ReportListItem(BaseSchema):
    id: str
    client_id: str
    client_company_name: str
    report_title: str
    start_date: date
    end_date: date
    generated_at: datetime
    total_weight_recycled: float
    net_impact: float


class ReportClient(BaseSchema):
    id: str
    company_name: str
    contact_person: str | None = None
    email: str | None = None
    address: str | None = None


class RecyclingLogItem(BaseSchema):
    """One recycling process in the reporting window."""

    process_id: str
    waste_data_id: str
    recycled_date: date
    quantity_recycled: float
    waste_type_name: str
    waste_category_name: str
    recycling_technology_name: str | None = None
    pickup_date: date | None = None
    distance_km: float | None = None


class ReportDetail(ReportRead):
    client: ReportClient
    recycling_log: list[RecyclingLogItem] = []


class ConfigDataClient(BaseSchema):
    id: str
    company_name: str


class ConfigDataQuestion(BaseSchema):
    id: str
    text: str
    display_order: int


class ReportConfigData(BaseSchema):
    clients: list[ConfigDataClient]
    questions: list[ConfigDataQuestion]


class WasteTypesResponse(BaseSchema):
    waste_types: list[NamedRef]


class ChartImages(BaseSchema):
    """Optional pre-rendered charts as ``data:image/png;base64,...`` URLs."""

    emissions_overview: str | None = None
    process_emissions: str | None = None


class PdfRenderRequest(BaseSchema):
    charts: ChartImages = ChartImages()
