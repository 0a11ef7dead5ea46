"""
User model for authentication and authorization.
"""

from sqlalchemy import String, Text, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel
from app.models.role import ROLE_HOME_PATHS, ROLE_PERMISSIONS, Permission, UserRole


class User(BaseModel):
    """User account model."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="User email address (unique)"
    )

    hashed_password: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Bcrypt hashed password"
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Display name"
    )

    role: Mapped[UserRole] = mapped_column(
        String(50),
        nullable=False,
        default=UserRole.MEMBER,
        comment="SUPER_ADMIN, ADMIN or MEMBER"
    )

    # Null only for SUPER_ADMIN accounts
    tenant_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
        comment="Associated tenant ID"
    )

    tenant: Mapped["Tenant | None"] = relationship(
        "Tenant",
        back_populates="users",
        lazy="selectin"
    )

    @property
    def role_enum(self) -> UserRole:
        return UserRole(self.role)

    @property
    def is_super_admin(self) -> bool:
        return self.role_enum is UserRole.SUPER_ADMIN

    @property
    def home_path(self) -> str:
        return ROLE_HOME_PATHS[self.role_enum]

    @property
    def permissions(self) -> frozenset[Permission]:
        return ROLE_PERMISSIONS[self.role_enum]

    def has_permission(self, permission: Permission) -> bool:
        return permission in self.permissions

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
