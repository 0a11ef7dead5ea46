"""
Waste entries and the recycling processes recorded against them.

A waste entry holds a normalized quantity in kilograms. Recycling processes
accumulate into ``recycled_quantity``, which never exceeds ``quantity`` by
more than ``QUANTITY_EPSILON``.
"""

from datetime import date
from enum import Enum

from sqlalchemy import JSON, Date, Float, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel

# Tolerance for float comparisons on kilogram quantities
QUANTITY_EPSILON = 0.001


class WasteStatus(str, Enum):
    """Recycling progress of a waste entry."""
    PARTIALLY_RECYCLED = "PARTIALLY_RECYCLED"
    FULLY_RECYCLED = "FULLY_RECYCLED"


class WasteUnit(str, Enum):
    """Units accepted on input; storage is always kilograms."""
    KG = "KG"
    G = "G"
    T = "T"
    LB = "LB"


UNIT_TO_KG: dict[WasteUnit, float] = {
    WasteUnit.KG: 1.0,
    WasteUnit.G: 0.001,
    WasteUnit.T: 1000.0,
    WasteUnit.LB: 0.453592,
}


def to_kilograms(quantity: float, unit: WasteUnit | str) -> float:
    return quantity * UNIT_TO_KG[WasteUnit(unit)]


def status_for(quantity: float, recycled_quantity: float) -> WasteStatus:
    if recycled_quantity >= quantity - QUANTITY_EPSILON:
        return WasteStatus.FULLY_RECYCLED
    return WasteStatus.PARTIALLY_RECYCLED


class WasteData(BaseModel):
    """A batch of waste collected from a client."""

    __tablename__ = "waste_data"

    client_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("clients.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Client the waste was collected from"
    )

    # Copied from the client at creation so tenant filters need no join
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
        comment="User who recorded the entry"
    )

    waste_type_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("waste_types.id"),
        nullable=False,
        index=True,
        comment="Waste type"
    )

    recycling_technology_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("recycling_technologies.id", ondelete="SET NULL"),
        nullable=True,
        comment="Recycling technology applied"
    )

    facility_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("facilities.id", ondelete="SET NULL"), nullable=True, comment="Destination facility"
    )
    pickup_location_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("pickup_locations.id", ondelete="SET NULL"), nullable=True, comment="Pickup location"
    )
    vehicle_type_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("vehicle_types.id", ondelete="SET NULL"), nullable=True, comment="Vehicle type used"
    )

    # Free-text logistics, kept alongside the references for ad-hoc addresses
    pickup_address: Mapped[str | None] = mapped_column(Text, nullable=True, comment="Pickup address")
    facility_address: Mapped[str | None] = mapped_column(Text, nullable=True, comment="Facility address")
    vehicle_type: Mapped[str | None] = mapped_column(String(255), nullable=True, comment="Vehicle description")

    quantity: Mapped[float] = mapped_column(Float, nullable=False, comment="Quantity in kilograms")
    unit: Mapped[WasteUnit] = mapped_column(String(10), nullable=False, default=WasteUnit.KG, comment="Unit as entered")
    recycled_quantity: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        default=0.0,
        comment="Kilograms recycled so far"
    )
    status: Mapped[WasteStatus] = mapped_column(
        String(50),
        nullable=False,
        default=WasteStatus.PARTIALLY_RECYCLED,
        index=True,
        comment="Recycling progress"
    )

    pickup_date: Mapped[date | None] = mapped_column(Date, nullable=True, comment="Date the waste was collected")
    recycled_date: Mapped[date] = mapped_column(Date, nullable=False, comment="Date recycling was recorded")
    distance_km: Mapped[float | None] = mapped_column(Float, nullable=True, comment="Pickup to facility distance")

    image_urls: Mapped[list[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        comment="Relative URLs of uploaded waste and recycling images"
    )

    client: Mapped["Client"] = relationship("Client", back_populates="waste_entries")
    waste_type: Mapped["WasteType"] = relationship("WasteType", lazy="selectin")
    recycling_technology: Mapped["RecyclingTechnology | None"] = relationship("RecyclingTechnology", lazy="selectin")
    facility: Mapped["Facility | None"] = relationship("Facility", lazy="selectin")
    recycling_processes: Mapped[list["RecyclingProcess"]] = relationship(
        "RecyclingProcess",
        back_populates="waste_data",
        order_by="RecyclingProcess.recycled_date",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        Index("idx_waste_tenant_client", "tenant_id", "client_id"),
        Index("idx_waste_tenant_pickup", "tenant_id", "pickup_date"),
    )

    def __repr__(self) -> str:
        return f"<WasteData(id={self.id}, quantity={self.quantity}, status={self.status})>"


class RecyclingProcess(BaseModel):
    """A dated amount of a waste entry that was recycled."""

    __tablename__ = "recycling_processes"

    waste_data_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("waste_data.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Parent waste entry"
    )

    quantity_recycled: Mapped[float] = mapped_column(Float, nullable=False, comment="Kilograms recycled")
    recycled_date: Mapped[date] = mapped_column(Date, nullable=False, index=True, comment="Date of recycling")

    waste_data: Mapped[WasteData] = relationship("WasteData", back_populates="recycling_processes")

    def __repr__(self) -> str:
        return f"<RecyclingProcess(id={self.id}, quantity_recycled={self.quantity_recycled})>"
