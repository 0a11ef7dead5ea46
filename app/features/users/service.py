"""
Tenant user management (admin only).
"""

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import AuthorizationError, ResourceNotFoundError, ValidationError
from app.core.security import hash_password
from app.features.auth.service import auth_service
from app.models.role import ASSIGNABLE_ROLES, UserRole
from app.models.user import User
from app.schemas.user import UserCreate, UserUpdate

logger = structlog.get_logger(__name__)


def _check_assignable(role: UserRole, action: str) -> None:
    if role is UserRole.SUPER_ADMIN:
        raise AuthorizationError(f"Cannot {action} Super Admin.")
    if role not in ASSIGNABLE_ROLES:
        raise ValidationError("Invalid role. Must be ADMIN or MEMBER.")


class UserService:
    """CRUD over the non-super-admin users of one tenant."""

    @staticmethod
    async def list_users(db: AsyncSession, tenant_id: str) -> list[User]:
        result = await db.execute(
            select(User)
            .where(
                User.tenant_id == tenant_id,
                User.role != UserRole.SUPER_ADMIN.value,
            )
            .order_by(User.name)
        )
        return list(result.scalars().all())

    @staticmethod
    async def _get_tenant_user(db: AsyncSession, user_id: str, tenant_id: str) -> User:
        result = await db.execute(
            select(User).where(User.id == user_id, User.tenant_id == tenant_id)
        )
        user = result.scalar_one_or_none()
        if user is None:
            raise ResourceNotFoundError("User not found in your tenant.")
        return user

    @staticmethod
    async def create_user(db: AsyncSession, data: UserCreate, tenant_id: str) -> User:
        """
        Raises:
            AuthorizationError: role is SUPER_ADMIN
            ValidationError: email taken
            QuotaExceededError: tenant already has the maximum number of users
        """
        _check_assignable(data.role, "create a")

        if await auth_service.email_taken(db, data.email):
            raise ValidationError("User with this email already exists.")

        await auth_service.ensure_user_capacity(db, tenant_id)

        user = User(
            name=data.name,
            email=data.email.lower(),
            hashed_password=hash_password(data.password),
            role=data.role.value,
            tenant_id=tenant_id,
        )
        db.add(user)
        await db.commit()
        await db.refresh(user)

        logger.info("tenant_user_created", new_user_id=user.id, role=user.role)
        return user

    @staticmethod
    async def update_user(
        db: AsyncSession,
        user_id: str,
        data: UserUpdate,
        tenant_id: str,
    ) -> User:
        if data.role is not None:
            _check_assignable(data.role, "promote to")

        user = await UserService._get_tenant_user(db, user_id, tenant_id)

        if data.email is not None and data.email.lower() != user.email:
            if await auth_service.email_taken(db, data.email):
                raise ValidationError("User with this email already exists.")
            user.email = data.email.lower()
        if data.name is not None:
            user.name = data.name
        if data.role is not None:
            user.role = data.role.value
        if data.password:
            user.hashed_password = hash_password(data.password)

        await db.commit()
        await db.refresh(user)
        return user

    @staticmethod
    async def delete_user(
        db: AsyncSession,
        user_id: str,
        tenant_id: str,
        acting_user_id: str,
    ) -> None:
        if user_id == acting_user_id:
            raise ValidationError("You cannot delete your own account.")

        user = await UserService._get_tenant_user(db, user_id, tenant_id)
        await db.delete(user)
        await db.commit()
        logger.info("tenant_user_deleted", deleted_user_id=user_id)


user_service = UserService()
