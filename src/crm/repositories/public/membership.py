"""Repository for UserTenantMembership entity."""

from uuid import UUID

from sqlmodel import select

from src.crm.models.enums import MembershipRole
from src.crm.models.public import UserTenantMembership
from src.crm.repositories.base import BaseRepository


class MembershipRepository(BaseRepository[UserTenantMembership]):
    model = UserTenantMembership

    async def get_membership(self, user_id: UUID, tenant_id: UUID) -> UserTenantMembership | None:
        """Membership regardless of is_active."""
        result = await self.session.execute(
            select(UserTenantMembership).where(
                UserTenantMembership.user_id == user_id,
                UserTenantMembership.tenant_id == tenant_id,
            )
        )
        return result.scalar_one_or_none()

    async def get_active_membership(
        self, user_id: UUID, tenant_id: UUID
    ) -> UserTenantMembership | None:
        result = await self.session.execute(
            select(UserTenantMembership).where(
                UserTenantMembership.user_id == user_id,
                UserTenantMembership.tenant_id == tenant_id,
                UserTenantMembership.is_active == True,  # noqa: E712
            )
        )
        return result.scalar_one_or_none()

    async def is_active_member(self, user_id: UUID, tenant_id: UUID) -> bool:
        return await self.get_active_membership(user_id, tenant_id) is not None

    def create_membership(
        self, user_id: UUID, tenant_id: UUID, role: str = MembershipRole.MEMBER.value
    ) -> UserTenantMembership:
        """Create and add a membership (no flush/commit)."""
        membership = UserTenantMembership(user_id=user_id, tenant_id=tenant_id, role=role)
        self.add(membership)
        return membership
