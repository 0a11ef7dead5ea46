"""
Authentication business logic.
"""

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.exceptions import (
    AuthenticationError,
    ConflictError,
    QuotaExceededError,
    ResourceNotFoundError,
)
from app.core.security import (
    burn_password_check,
    create_access_token,
    hash_password,
    verify_password,
)
from app.features.auth.schemas import RegisterRequest, TokenResponse
from app.models.role import UserRole
from app.models.tenant import Tenant
from app.models.user import User
from app.schemas.user import UserRead

logger = structlog.get_logger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


class AuthService:
    """Authentication service with business logic."""

    @staticmethod
    async def authenticate_user(
        db: AsyncSession,
        email: str,
        password: str,
    ) -> User:
        """
        Authenticate user by email and password.

        Unknown email and wrong password raise the same error after the same
        amount of bcrypt work.

        Raises:
            AuthenticationError: credentials don't match an account
        """
        result = await db.execute(
            select(User).where(func.lower(User.email) == email.lower())
        )
        user = result.scalar_one_or_none()

        if user is None:
            burn_password_check(password)
            logger.warning("login_failed", reason="unknown_email")
            raise AuthenticationError(INVALID_CREDENTIALS)

        if not verify_password(password, user.hashed_password):
            logger.warning("login_failed", reason="bad_password", user_id=user.id)
            raise AuthenticationError(INVALID_CREDENTIALS)

        logger.info("login_succeeded", user_id=user.id, role=user.role)
        return user

    @staticmethod
    def issue_token(user: User) -> TokenResponse:
        """Access token carrying the claims downstream handlers rely on."""
        token = create_access_token(
            subject={
                "sub": user.id,
                "email": user.email,
                "role": UserRole(user.role).value,
                "tenant_id": user.tenant_id,
            }
        )
        return TokenResponse(
            token=token,
            token_type="bearer",
            expires_in=settings.access_token_expire_minutes * 60,
            user=UserRead.model_validate(user),
        )

    @staticmethod
    async def count_tenant_users(db: AsyncSession, tenant_id: str) -> int:
        result = await db.execute(
            select(func.count(User.id)).where(
                User.tenant_id == tenant_id,
                User.role != UserRole.SUPER_ADMIN.value,
            )
        )
        return result.scalar_one()

    @staticmethod
    def tenant_lock_query(tenant_id: str):
        return select(Tenant.id).where(Tenant.id == tenant_id).with_for_update()

    @staticmethod
    async def ensure_user_capacity(db: AsyncSession, tenant_id: str) -> None:
        """
        Lock the tenant row, then check its user count.

        The lock is held until the caller commits, so concurrent creations
        for one tenant count one after another.

        Raises:
            QuotaExceededError: tenant already holds the maximum number of users
        """
        await db.execute(AuthService.tenant_lock_query(tenant_id))
        limit = settings.max_users_per_tenant
        if await AuthService.count_tenant_users(db, tenant_id) >= limit:
            raise QuotaExceededError(
                f"Tenant user limit reached. Maximum {limit} users allowed."
            )

    @staticmethod
    async def email_taken(db: AsyncSession, email: str) -> bool:
        result = await db.execute(
            select(User.id).where(func.lower(User.email) == email.lower())
        )
        return result.first() is not None

    @staticmethod
    async def register(db: AsyncSession, data: RegisterRequest) -> User:
        """
        Register a MEMBER into an existing tenant.

        Raises:
            ResourceNotFoundError: tenant doesn't exist
            ConflictError: email already registered
            QuotaExceededError: tenant is at its user cap
        """
        tenant = await db.get(Tenant, data.tenant_id)
        if tenant is None:
            raise ResourceNotFoundError("Tenant not found")

        if await AuthService.email_taken(db, data.email):
            raise ConflictError("User with this email already exists")

        await AuthService.ensure_user_capacity(db, tenant.id)

        user = User(
            email=data.email.lower(),
            hashed_password=hash_password(data.password),
            name=data.name,
            role=UserRole.MEMBER.value,
            tenant_id=tenant.id,
        )
        db.add(user)
        await db.commit()
        await db.refresh(user)

        logger.info("user_registered", user_id=user.id, tenant_id=tenant.id)
        return user


# Singleton instance
auth_service = AuthService()
