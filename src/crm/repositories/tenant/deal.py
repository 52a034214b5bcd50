"""Repositories for deals, contracts and quotes."""

from uuid import UUID

from sqlalchemy import func
from sqlmodel import select

from src.crm.models.enums import ContractStatus, DealStatus
from src.crm.models.tenant import Contract, Deal, Quote
from src.crm.repositories.base import TenantScopedRepository

_CLOSED_DEAL_STATUSES = (DealStatus.WON.value, DealStatus.LOST.value)


class DealRepository(TenantScopedRepository[Deal]):
    model = Deal
    search_fields = ("name",)

    async def count_open(self) -> int:
        return await self.count(Deal.status.not_in(_CLOSED_DEAL_STATUSES))  # type: ignore[attr-defined]

    async def sum_open_value(self) -> float:
        result = await self.session.execute(
            select(func.coalesce(func.sum(Deal.value), 0)).where(
                Deal.tenant_id == self.tenant_id,
                Deal.deleted_at.is_(None),  # type: ignore[union-attr]
                Deal.status.not_in(_CLOSED_DEAL_STATUSES),  # type: ignore[attr-defined]
            )
        )
        return float(result.scalar_one())


class ContractRepository(TenantScopedRepository[Contract]):
    model = Contract
    search_fields = ("name", "customer_reference_number")

    async def get_by_deal(self, deal_id: UUID) -> Contract | None:
        result = await self.session.execute(
            self.scoped_query().where(Contract.deal_id == deal_id)
        )
        return result.scalars().first()

    async def count_active(self) -> int:
        return await self.count(Contract.status == ContractStatus.ACTIVE.value)


class QuoteRepository(TenantScopedRepository[Quote]):
    model = Quote
    search_fields = ("name", "reference_number")
