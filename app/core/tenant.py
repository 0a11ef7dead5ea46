"""
Tenant isolation utilities.

Every tenant-owned lookup filters on the tenant id AND the resource id in one
query. A row that exists under another tenant is indistinguishable from a
missing row: both raise ``ResourceNotFoundError``.
"""

from typing import Type, TypeVar

import structlog
from sqlalchemy import Select, delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ResourceNotFoundError
from app.models.base import BaseModel

logger = structlog.get_logger(__name__)

T = TypeVar("T", bound=BaseModel)


def tenant_scoped_query(model: Type[T], tenant_id: str) -> Select:
    """
    Select statement restricted to one tenant's rows.

    Usage:
        query = tenant_scoped_query(Client, user.tenant_id)
        result = await db.execute(query.order_by(Client.company_name))
    """
    return select(model).where(model.tenant_id == tenant_id)


async def get_owned_or_404(
    db: AsyncSession,
    model: Type[T],
    resource_id: str,
    tenant_id: str,
    label: str | None = None,
) -> T:
    """
    Fetch a tenant-owned row or raise 404.

    Raises:
        ResourceNotFoundError: absent, or owned by a different tenant
    """
    result = await db.execute(
        tenant_scoped_query(model, tenant_id).where(model.id == resource_id)
    )
    resource = result.scalar_one_or_none()
    if resource is None:
        logger.info(
            "tenant_lookup_miss",
            model=model.__name__,
            resource_id=resource_id,
        )
        raise ResourceNotFoundError(f"{label or model.__name__} not found")
    return resource


async def update_owned(
    db: AsyncSession,
    model: Type[T],
    resource_id: str,
    tenant_id: str,
    values: dict,
    label: str | None = None,
) -> int:
    """Filtered UPDATE; raises 404 when no row matched both ids."""
    result = await db.execute(
        update(model)
        .where(model.id == resource_id, model.tenant_id == tenant_id)
        .values(**values)
    )
    if result.rowcount == 0:
        raise ResourceNotFoundError(f"{label or model.__name__} not found")
    return result.rowcount


async def delete_owned(
    db: AsyncSession,
    model: Type[T],
    resource_id: str,
    tenant_id: str,
    label: str | None = None,
) -> int:
    """Filtered DELETE; raises 404 when no row matched both ids."""
    result = await db.execute(
        delete(model).where(model.id == resource_id, model.tenant_id == tenant_id)
    )
    if result.rowcount == 0:
        raise ResourceNotFoundError(f"{label or model.__name__} not found")
    return result.rowcount
