"""Tenant listing and creation."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.crm.core.exceptions import ConflictError
from src.crm.core.logging import get_logger
from src.crm.models.enums import MembershipRole
from src.crm.models.public import Tenant, UserTenantMembership
from src.crm.repositories import MembershipRepository, TenantRepository

logger = get_logger(__name__)


class TenantService:
    def __init__(
        self,
        tenant_repo: TenantRepository,
        membership_repo: MembershipRepository,
        session: AsyncSession,
    ):
        self.tenant_repo = tenant_repo
        self.membership_repo = membership_repo
        self.session = session

    async def list_for_user(self, user_id: UUID) -> list[tuple[Tenant, UserTenantMembership]]:
        return await self.tenant_repo.list_for_user(user_id)

    async def create_tenant(self, name: str, slug: str, owner_id: UUID) -> Tenant:
        """Create a tenant; the creating user becomes its owner.

        Raises:
            ConflictError: If the slug is taken.
        """
        if await self.tenant_repo.get_by_slug(slug) is not None:
            raise ConflictError(f"Tenant with slug '{slug}' already exists")

        try:
            tenant = Tenant(name=name, slug=slug)
            self.tenant_repo.add(tenant)
            await self.session.flush()
            self.membership_repo.create_membership(owner_id, tenant.id, MembershipRole.OWNER.value)
            await self.session.commit()
            await self.session.refresh(tenant)
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to create tenant", slug=slug, error=str(e))
            raise

        logger.info("Tenant created", tenant_id=str(tenant.id), slug=slug)
        return tenant
