"""
Global reference data shared by every tenant.

Waste taxonomy (category -> type), recycling technologies and the master
report questions offered by the report wizard.
"""

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel


class WasteCategory(BaseModel):
    __tablename__ = "waste_categories"

    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, comment="Category name")

    waste_types: Mapped[list["WasteType"]] = relationship(
        "WasteType",
        back_populates="category",
        order_by="WasteType.name",
        cascade="all, delete-orphan",
    )


class WasteType(BaseModel):
    __tablename__ = "waste_types"

    name: Mapped[str] = mapped_column(String(255), nullable=False, comment="Waste type name")

    category_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("waste_categories.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Parent category"
    )

    category: Mapped[WasteCategory] = relationship(
        "WasteCategory",
        back_populates="waste_types",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<WasteType(id={self.id}, name={self.name})>"


class RecyclingTechnology(BaseModel):
    __tablename__ = "recycling_technologies"

    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, comment="Technology name")
    description: Mapped[str | None] = mapped_column(Text, nullable=True, comment="Short description")


class MasterReportQuestion(BaseModel):
    """Question template the wizard suggests when composing a report."""

    __tablename__ = "master_report_questions"

    text: Mapped[str] = mapped_column(Text, nullable=False, comment="Question text")
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0, comment="Sort key")
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, comment="Offered in the wizard")
