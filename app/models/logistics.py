"""
Tenant-scoped logistics reference data.
"""

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import BaseModel


class _TenantOwned:
    tenant_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Owning tenant"
    )


class Facility(_TenantOwned, BaseModel):
    """Recycling facility the tenant delivers waste to."""

    __tablename__ = "facilities"

    name: Mapped[str] = mapped_column(String(255), nullable=False, comment="Facility name")
    full_address: Mapped[str] = mapped_column(Text, nullable=False, comment="Address used for distance lookups")


class PickupLocation(_TenantOwned, BaseModel):
    """Recurring place waste is collected from."""

    __tablename__ = "pickup_locations"

    name: Mapped[str] = mapped_column(String(255), nullable=False, comment="Location name")
    full_address: Mapped[str] = mapped_column(Text, nullable=False, comment="Address used for distance lookups")


class VehicleType(_TenantOwned, BaseModel):
    __tablename__ = "vehicle_types"

    name: Mapped[str] = mapped_column(String(255), nullable=False, comment="Vehicle type name")
