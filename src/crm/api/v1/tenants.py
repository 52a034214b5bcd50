"""Tenant endpoints."""

from fastapi import APIRouter, status

from src.crm.api.dependencies import (
    AuthenticatedUser,
    CurrentMembership,
    TenantServiceDep,
    ValidatedTenant,
)
from src.crm.core.exceptions import raise_http_error
from src.crm.schemas.tenant import TenantCreate, TenantMembershipRead, TenantRead

router = APIRouter(prefix="/tenants", tags=["tenants"])


@router.get(
    "",
    response_model=list[TenantMembershipRead],
    summary="List my tenants",
    description="Tenants where the user has an active membership. No X-Tenant-ID needed.",
)
async def list_my_tenants(
    user: AuthenticatedUser,
    service: TenantServiceDep,
) -> list[TenantMembershipRead]:
    return [
        TenantMembershipRead(
            id=tenant.id, name=tenant.name, slug=tenant.slug, role=membership.role
        )
        for tenant, membership in await service.list_for_user(user.id)
    ]


@router.post(
    "",
    response_model=TenantRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create tenant",
    description="The creating user becomes the tenant's owner.",
    responses={409: {"description": "Tenant slug already exists"}},
)
async def create_tenant(
    tenant_data: TenantCreate,
    user: AuthenticatedUser,
    service: TenantServiceDep,
) -> TenantRead:
    try:
        tenant = await service.create_tenant(tenant_data.name, tenant_data.slug, user.id)
    except ValueError as e:
        raise_http_error(e)
    return TenantRead.model_validate(tenant)


@router.get(
    "/current",
    response_model=TenantMembershipRead,
    summary="Get current tenant",
    description="The X-Tenant-ID tenant with the user's role in it.",
)
async def get_current_tenant(
    tenant: ValidatedTenant,
    membership: CurrentMembership,
) -> TenantMembershipRead:
    return TenantMembershipRead(
        id=tenant.id, name=tenant.name, slug=tenant.slug, role=membership.role
    )
