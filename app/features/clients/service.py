"""
Client business logic.
"""

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.tenant import delete_owned, get_owned_or_404, tenant_scoped_query
from app.features.clients.schemas import ClientCreate, ClientUpdate
from app.models.client import Client

logger = structlog.get_logger(__name__)


class ClientService:
    """Tenant-scoped client CRUD."""

    @staticmethod
    async def list_clients(db: AsyncSession, tenant_id: str) -> list[Client]:
        result = await db.execute(
            tenant_scoped_query(Client, tenant_id).order_by(Client.company_name)
        )
        return list(result.scalars().all())

    @staticmethod
    async def get_client(db: AsyncSession, client_id: str, tenant_id: str) -> Client:
        return await get_owned_or_404(db, Client, client_id, tenant_id, label="Client")

    @staticmethod
    async def create_client(
        db: AsyncSession,
        data: ClientCreate,
        tenant_id: str,
        user_id: str,
    ) -> Client:
        client = Client(
            **data.model_dump(),
            tenant_id=tenant_id,
            created_by_id=user_id,
        )
        db.add(client)
        await db.commit()
        await db.refresh(client)

        logger.info("client_created", client_id=client.id)
        return client

    @staticmethod
    async def update_client(
        db: AsyncSession,
        client_id: str,
        data: ClientUpdate,
        tenant_id: str,
    ) -> Client:
        client = await get_owned_or_404(db, Client, client_id, tenant_id, label="Client")

        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(client, field, value)

        await db.commit()
        await db.refresh(client)
        return client

    @staticmethod
    async def delete_client(db: AsyncSession, client_id: str, tenant_id: str) -> None:
        """Delete a client; its waste entries and reports go with it (FK cascade)."""
        await delete_owned(db, Client, client_id, tenant_id, label="Client")
        await db.commit()
        logger.info("client_deleted", client_id=client_id)


client_service = ClientService()
