"""
Client model: the customer organizations a tenant collects waste from.
"""

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel


class Client(BaseModel):
    """Customer of a tenant."""

    __tablename__ = "clients"

    company_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        comment="Client company name"
    )

    contact_person: Mapped[str | None] = mapped_column(String(255), nullable=True, comment="Contact person")
    email: Mapped[str | None] = mapped_column(String(255), nullable=True, comment="Contact email")
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True, comment="Contact phone")
    address: Mapped[str | None] = mapped_column(Text, nullable=True, comment="Postal address")

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
        comment="User who created the client"
    )

    tenant: Mapped["Tenant"] = relationship("Tenant", back_populates="clients")

    waste_entries: Mapped[list["WasteData"]] = relationship(
        "WasteData",
        back_populates="client",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    reports: Mapped[list["Report"]] = relationship(
        "Report",
        back_populates="client",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Client(id={self.id}, company_name={self.company_name})>"
