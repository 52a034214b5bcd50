"""Repository for Tenant entity."""

from uuid import UUID

from sqlmodel import select

from src.crm.models.public import Tenant, UserTenantMembership
from src.crm.repositories.base import BaseRepository


class TenantRepository(BaseRepository[Tenant]):
    model = Tenant

    async def get_by_slug(self, slug: str) -> Tenant | None:
        result = await self.session.execute(select(Tenant).where(Tenant.slug == slug))
        return result.scalar_one_or_none()

    async def list_for_user(self, user_id: UUID) -> list[tuple[Tenant, UserTenantMembership]]:
        """Live tenants where the user has an active membership, by name."""
        result = await self.session.execute(
            select(Tenant, UserTenantMembership)
            .join(UserTenantMembership, UserTenantMembership.tenant_id == Tenant.id)
            .where(
                UserTenantMembership.user_id == user_id,
                UserTenantMembership.is_active == True,  # noqa: E712
                Tenant.deleted_at.is_(None),  # type: ignore[union-attr]
            )
            .order_by(Tenant.name)
        )
        return [(tenant, membership) for tenant, membership in result.all()]
