"""
Carbon reports. Immutable once generated: KPIs are stored, never recomputed.
"""

from datetime import date, datetime

from sqlalchemy import JSON, Date, DateTime, Float, ForeignKey, Index, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel


class Report(BaseModel):
    """Snapshot of a client's recycling impact over a reporting window."""

    __tablename__ = "reports"

    client_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("clients.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Client the report covers"
    )

    tenant_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Owning tenant"
    )

    created_by_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        comment="User who generated the report"
    )

    report_title: Mapped[str] = mapped_column(String(500), nullable=False, comment="Report title")
    start_date: Mapped[date] = mapped_column(Date, nullable=False, comment="Reporting window start (inclusive)")
    end_date: Mapped[date] = mapped_column(Date, nullable=False, comment="Reporting window end (inclusive)")
    included_waste_type_ids: Mapped[list[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        comment="Waste type filter; empty means all types"
    )
    generated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        comment="Generation timestamp"
    )

    # Stored KPIs, rounded to two decimals
    total_weight_recycled: Mapped[float] = mapped_column(Float, nullable=False, default=0.0, comment="kg")
    total_waste_generated: Mapped[float] = mapped_column(Float, nullable=False, default=0.0, comment="kg")
    emissions_avoided: Mapped[float] = mapped_column(Float, nullable=False, default=0.0, comment="kg CO2e")
    logistics_emissions: Mapped[float] = mapped_column(Float, nullable=False, default=0.0, comment="kg CO2e")
    recycling_emissions: Mapped[float] = mapped_column(Float, nullable=False, default=0.0, comment="kg CO2e")
    net_impact: Mapped[float] = mapped_column(Float, nullable=False, default=0.0, comment="kg CO2e")
    diversion_rate: Mapped[float] = mapped_column(Float, nullable=False, default=0.0, comment="percent")
    cars_off_road_equivalent: Mapped[float] = mapped_column(Float, nullable=False, default=0.0, comment="cars/year")
    trees_saved: Mapped[float] = mapped_column(Float, nullable=False, default=0.0, comment="trees")
    landfill_space_saved: Mapped[float] = mapped_column(Float, nullable=False, default=0.0, comment="m3")

    client: Mapped["Client"] = relationship("Client", back_populates="reports", lazy="selectin")
    questions: Mapped[list["ReportQuestion"]] = relationship(
        "ReportQuestion",
        back_populates="report",
        order_by="ReportQuestion.position",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )

    __table_args__ = (
        Index("idx_report_tenant_generated", "tenant_id", "generated_at"),
    )

    def __repr__(self) -> str:
        return f"<Report(id={self.id}, title={self.report_title})>"


class ReportQuestion(BaseModel):
    __tablename__ = "report_questions"

    report_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("reports.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Parent report"
    )
    question_text: Mapped[str] = mapped_column(Text, nullable=False, comment="Question")
    answer_text: Mapped[str | None] = mapped_column(Text, nullable=True, comment="Answer")
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0, comment="Order within the report")

    report: Mapped[Report] = relationship("Report", back_populates="questions")
