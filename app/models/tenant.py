"""
Tenant model for multi-tenancy.

Each tenant is a waste-management company using the platform. Every
client, waste entry, report and logistics record hangs off exactly one tenant.
"""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel


class Tenant(BaseModel):
    """Tenant (waste-management company)."""

    __tablename__ = "tenants"

    company_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Company name"
    )

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
        comment="Tenant active status"
    )

    users: Mapped[list["User"]] = relationship(
        "User",
        back_populates="tenant",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    clients: Mapped[list["Client"]] = relationship(
        "Client",
        back_populates="tenant",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Tenant(id={self.id}, company_name={self.company_name})>"
