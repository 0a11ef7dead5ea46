"""
Authentication endpoints.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.features.auth.dependencies import CurrentUser
from app.features.auth.schemas import (
    LoginRequest,
    MeResponse,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
)
from app.features.auth.service import auth_service
from app.schemas.user import UserRead

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TokenResponse:
    """
    Exchange email and password for a bearer token.

    Any mismatch answers 401 "Invalid credentials".
    """
    user = await auth_service.authenticate_user(
        db,
        email=login_data.email,
        password=login_data.password,
    )
    return auth_service.issue_token(user)


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(
    data: RegisterRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> RegisterResponse:
    """Create a MEMBER in an existing tenant (seeding and admin tooling)."""
    user = await auth_service.register(db, data)
    return RegisterResponse(user_id=user.id)


@router.get("/me", response_model=MeResponse)
async def get_current_user_info(current_user: CurrentUser) -> MeResponse:
    """Current user with the landing path and permissions of their role."""
    return MeResponse(
        **UserRead.model_validate(current_user).model_dump(),
        home_path=current_user.home_path,
        permissions=sorted(current_user.permissions, key=lambda p: p.value),
        tenant_company_name=current_user.tenant.company_name if current_user.tenant else None,
    )
