"""
Client management endpoints.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.features.auth.dependencies import CurrentTenant
from app.features.clients.schemas import ClientCreate, ClientRead, ClientUpdate
from app.features.clients.service import client_service
from app.schemas.common import MessageResponse

router = APIRouter(prefix="/clients", tags=["Clients"])


@router.get("", response_model=list[ClientRead])
async def list_clients(
    ctx: CurrentTenant,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[ClientRead]:
    """All clients of the caller's tenant, alphabetical."""
    clients = await client_service.list_clients(db, ctx.tenant_id)
    return [ClientRead.model_validate(c) for c in clients]


@router.post("", response_model=ClientRead, status_code=status.HTTP_201_CREATED)
async def create_client(
    data: ClientCreate,
    ctx: CurrentTenant,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ClientRead:
    client = await client_service.create_client(db, data, ctx.tenant_id, ctx.user_id)
    return ClientRead.model_validate(client)


@router.get("/{client_id}", response_model=ClientRead)
async def get_client(
    client_id: str,
    ctx: CurrentTenant,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ClientRead:
    client = await client_service.get_client(db, client_id, ctx.tenant_id)
    return ClientRead.model_validate(client)


@router.put("/{client_id}", response_model=ClientRead)
async def update_client(
    client_id: str,
    data: ClientUpdate,
    ctx: CurrentTenant,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ClientRead:
    client = await client_service.update_client(db, client_id, data, ctx.tenant_id)
    return ClientRead.model_validate(client)


@router.delete("/{client_id}", response_model=MessageResponse)
async def delete_client(
    client_id: str,
    ctx: CurrentTenant,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MessageResponse:
    """Delete a client together with its waste entries and reports."""
    await client_service.delete_client(db, client_id, ctx.tenant_id)
    return MessageResponse(message="Client deleted successfully")
