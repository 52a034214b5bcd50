"""Generic CRUD for tenant-scoped entities."""

from typing import Any
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from src.crm.core.exceptions import NotFoundError
from src.crm.core.logging import get_logger
from src.crm.models.base import utc_now
from src.crm.repositories import (
    CompanyRepository,
    ContactRepository,
    ContractRepository,
    DealRepository,
    MembershipRepository,
    QuoteRepository,
    TenantScopedRepository,
)
from src.crm.services.reward_service import RewardService

logger = get_logger(__name__)

# Body fields that hold the id of another row of the same tenant.
REFERENCES: dict[str, tuple[type[TenantScopedRepository[Any]], str]] = {
    "company_id": (CompanyRepository, "Company"),
    "contact_id": (ContactRepository, "Contact"),
    "deal_id": (DealRepository, "Deal"),
}

# Tables a todo may be attached to through entity_type and entity_id.
ATTACHABLE: dict[str, tuple[type[TenantScopedRepository[Any]], str]] = {
    "companies": (CompanyRepository, "Company"),
    "contacts": (ContactRepository, "Contact"),
    "deals": (DealRepository, "Deal"),
    "contracts": (ContractRepository, "Contract"),
    "quotes": (QuoteRepository, "Quote"),
}


class EntityService[ModelType: SQLModel]:
    """List, get, create, update and soft-delete rows of one tenant.

    If ``create_action`` is set, creating a row awards that reward action to
    the creating user in the same transaction.
    """

    def __init__(
        self,
        repo: TenantScopedRepository[ModelType],
        session: AsyncSession,
        label: str,
        reward_service: RewardService | None = None,
        create_action: str | None = None,
    ):
        self.repo = repo
        self.session = session
        self.label = label
        self.reward_service = reward_service
        self.create_action = create_action
        self.tenant_id = repo.tenant_id

    @property
    def entity_type(self) -> str:
        return self.repo.model.__tablename__  # type: ignore[return-value]

    def _has_field(self, name: str) -> bool:
        return name in self.repo.model.model_fields

    async def list_page(
        self, cursor: str | None, limit: int, search: str | None = None, **filters: Any
    ) -> tuple[list[ModelType], str | None, bool]:
        return await self.repo.list_page(cursor, limit, search, **filters)

    async def get(self, entity_id: UUID) -> ModelType:
        entity = await self.repo.get(entity_id)
        if entity is None:
            raise NotFoundError(f"{self.label} not found")
        return entity

    async def create(self, data: BaseModel, user_id: UUID) -> ModelType:
        values = data.model_dump()
        await self.check_references(values)
        if self._has_field("created_by"):
            values["created_by"] = user_id
        entity = self.repo.model(tenant_id=self.tenant_id, **values)

        try:
            self.repo.add(entity)
            await self.session.flush()
            await self._award(user_id, self.create_action, entity)
            await self.session.commit()
            await self.session.refresh(entity)
        except Exception as e:
            await self.session.rollback()
            logger.error(f"Failed to create {self.label.lower()}", error=str(e))
            raise

        logger.info(f"{self.label} created", entity_id=str(entity.id))  # type: ignore[attr-defined]
        return entity

    async def update(self, entity_id: UUID, data: BaseModel, user_id: UUID) -> ModelType:
        """Partial update: only fields present in the request are written."""
        entity = await self.get(entity_id)
        values = data.model_dump(exclude_unset=True)
        await self.check_references(values, entity)
        try:
            for field, value in values.items():
                setattr(entity, field, value)
            entity.updated_at = utc_now()  # type: ignore[attr-defined]
            self.session.add(entity)
            await self.session.commit()
            await self.session.refresh(entity)
            return entity
        except Exception:
            await self.session.rollback()
            raise

    async def delete(self, entity_id: UUID, user_id: UUID) -> None:
        """Soft delete: the row stays but every scoped read skips it."""
        entity = await self.get(entity_id)
        try:
            entity.deleted_at = utc_now()  # type: ignore[attr-defined]
            if self._has_field("deleted_by"):
                entity.deleted_by = user_id  # type: ignore[attr-defined]
            self.session.add(entity)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        logger.info(f"{self.label} deleted", entity_id=str(entity_id))

    async def check_references(
        self, values: dict[str, Any], entity: ModelType | None = None
    ) -> None:
        """Reject ids that do not resolve to a visible row of this tenant.

        Raises:
            NotFoundError: A referenced row is missing, deleted or belongs to
                another tenant, or the assignee is not an active member.
        """
        for field, (repo_class, label) in REFERENCES.items():
            ref_id = values.get(field)
            if ref_id is not None and self._has_field(field):
                if await repo_class(self.session, self.tenant_id).get(ref_id) is None:
                    raise NotFoundError(f"{label} not found")

        assignee = values.get("assigned_to")
        if assignee is not None and self._has_field("assigned_to"):
            members = MembershipRepository(self.session)
            if not await members.is_active_member(assignee, self.tenant_id):
                raise NotFoundError("Assignee not found")

        if self._has_field("entity_id"):
            entity_type = values.get("entity_type", getattr(entity, "entity_type", None))
            entity_id = values.get("entity_id", getattr(entity, "entity_id", None))
            target = ATTACHABLE.get(entity_type or "")
            if target is not None and entity_id is not None:
                repo_class, label = target
                if await repo_class(self.session, self.tenant_id).get(entity_id) is None:
                    raise NotFoundError(f"{label} not found")

    async def _award(self, user_id: UUID, action: str | None, entity: ModelType) -> int:
        if self.reward_service is None or action is None:
            return 0
        return await self.reward_service.award_points(
            user_id,
            action,
            entity_type=self.entity_type,
            entity_id=entity.id,  # type: ignore[attr-defined]
        )
