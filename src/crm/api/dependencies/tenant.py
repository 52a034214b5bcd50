"""Tenant header extraction and validation dependencies."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Header, HTTPException, status

from src.crm.api.dependencies.db import DBSession
from src.crm.models import Tenant
from src.crm.repositories import TenantRepository


async def get_tenant_id_from_header(
    x_tenant_id: Annotated[str | None, Header()] = None,
) -> UUID:
    """Extract the tenant id from the X-Tenant-ID header."""
    if not x_tenant_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="X-Tenant-ID header is required",
        )
    try:
        return UUID(x_tenant_id.strip())
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="X-Tenant-ID header must be a valid UUID",
        ) from e


async def get_validated_tenant(
    tenant_id: Annotated[UUID, Depends(get_tenant_id_from_header)],
    session: DBSession,
) -> Tenant:
    """Validate tenant exists, is not deleted and is active."""
    tenant = await TenantRepository(session).get_by_id(tenant_id)

    if tenant is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Tenant not found",
        )

    if tenant.deleted_at is not None:
        raise HTTPException(
            status_code=status.HTTP_410_GONE,
            detail="Tenant has been deleted",
        )

    if not tenant.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Tenant is inactive",
        )

    return tenant


ValidatedTenant = Annotated[Tenant, Depends(get_validated_tenant)]
