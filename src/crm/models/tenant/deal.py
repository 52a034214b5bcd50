"""Sales pipeline: deals, the contracts they turn into, and quotes."""

from datetime import date
from uuid import UUID

from sqlmodel import Field

from src.crm.models.base import SoftDeleteMixin, TenantScopedModel
from src.crm.models.enums import ContractStatus, DealStatus, Priority, QuoteStatus


class Deal(TenantScopedModel, SoftDeleteMixin, table=True):
    __tablename__ = "deals"

    name: str = Field(max_length=200, index=True)
    description: str | None = Field(default=None, max_length=2000)
    value: float | None = Field(default=None)
    status: str = Field(default=DealStatus.LEAD.value, max_length=20, index=True)
    probability: int = Field(default=0, ge=0, le=100)
    priority: str = Field(default=Priority.MEDIUM.value, max_length=10)
    expected_close_date: date | None = Field(default=None)
    company_id: UUID | None = Field(default=None, foreign_key="companies.id", index=True)
    contact_id: UUID | None = Field(default=None, foreign_key="contacts.id", index=True)
    assigned_to: UUID | None = Field(default=None, foreign_key="profiles.id")
    created_by: UUID | None = Field(default=None, foreign_key="profiles.id")
    notes: str | None = Field(default=None)

    @property
    def is_open(self) -> bool:
        return self.status not in (DealStatus.WON.value, DealStatus.LOST.value)

    @property
    def is_won(self) -> bool:
        return self.status == DealStatus.WON.value or self.probability >= 100


class Contract(TenantScopedModel, SoftDeleteMixin, table=True):
    __tablename__ = "contracts"

    name: str = Field(max_length=200, index=True)
    description: str | None = Field(default=None, max_length=2000)
    deal_id: UUID | None = Field(default=None, foreign_key="deals.id", index=True)
    company_id: UUID | None = Field(default=None, foreign_key="companies.id", index=True)
    value: float | None = Field(default=None)
    status: str = Field(default=ContractStatus.ACTIVE.value, max_length=20, index=True)
    signed_date: date | None = Field(default=None)
    start_date: date | None = Field(default=None)
    end_date: date | None = Field(default=None)
    customer_reference_number: str | None = Field(default=None, max_length=100)
    assigned_to: UUID | None = Field(default=None, foreign_key="profiles.id")
    notes: str | None = Field(default=None)


class Quote(TenantScopedModel, SoftDeleteMixin, table=True):
    __tablename__ = "quotes"

    name: str = Field(max_length=200, index=True)
    reference_number: str | None = Field(default=None, max_length=100)
    deal_id: UUID | None = Field(default=None, foreign_key="deals.id", index=True)
    contact_id: UUID | None = Field(default=None, foreign_key="contacts.id")
    status: str = Field(default=QuoteStatus.DRAFT.value, max_length=20, index=True)
    total_amount: float | None = Field(default=None)
    expiry_date: date | None = Field(default=None)
    notes: str | None = Field(default=None)
    created_by: UUID | None = Field(default=None, foreign_key="profiles.id")
    assigned_to: UUID | None = Field(default=None, foreign_key="profiles.id")
    deleted_by: UUID | None = Field(default=None, foreign_key="profiles.id")
