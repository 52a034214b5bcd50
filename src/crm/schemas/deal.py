"""Deal, contract and quote schemas."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.crm.models.enums import ContractStatus, DealStatus, Priority, QuoteStatus
from src.crm.schemas.common import (
    PartialUpdate,
    blank_to_none,
    strip_optional_required,
    strip_required,
)


class DealCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    name: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    value: float | None = Field(default=None, ge=0)
    status: DealStatus = DealStatus.LEAD
    probability: int = Field(default=0, ge=0, le=100)
    priority: Priority = Priority.MEDIUM
    expected_close_date: date | None = None
    company_id: UUID | None = None
    contact_id: UUID | None = None
    assigned_to: UUID | None = None
    notes: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return strip_required(v, "Deal name")

    @field_validator("description", "notes")
    @classmethod
    def validate_optional_text(cls, v: str | None) -> str | None:
        return blank_to_none(v)


class DealUpdate(PartialUpdate):
    model_config = ConfigDict(use_enum_values=True)
    not_nullable = ("name", "status", "probability", "priority")

    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    value: float | None = Field(default=None, ge=0)
    status: DealStatus | None = None
    probability: int | None = Field(default=None, ge=0, le=100)
    priority: Priority | None = None
    expected_close_date: date | None = None
    company_id: UUID | None = None
    contact_id: UUID | None = None
    assigned_to: UUID | None = None
    notes: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        return strip_optional_required(v, "Deal name")


class DealRead(BaseModel):
    id: UUID
    name: str
    description: str | None
    value: float | None
    status: str
    probability: int
    priority: str
    expected_close_date: date | None
    company_id: UUID | None
    contact_id: UUID | None
    assigned_to: UUID | None
    created_by: UUID | None
    notes: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class DealMove(BaseModel):
    """Move a deal through the pipeline."""

    model_config = ConfigDict(use_enum_values=True)

    status: DealStatus
    probability: int = Field(ge=0, le=100)


class ContractDraft(BaseModel):
    """Contract fields prefilled from a won deal, not yet saved."""

    name: str
    value: float | None
    deal_id: UUID
    company_id: UUID | None
    assigned_to: UUID | None


class DealMoveResult(BaseModel):
    deal: DealRead
    points_awarded: int = 0
    contract_draft: ContractDraft | None = Field(
        default=None,
        description="Present when the move reached probability 100 or status 'won'.",
    )


class ContractCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    name: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    deal_id: UUID | None = None
    company_id: UUID | None = None
    value: float | None = Field(default=None, ge=0)
    status: ContractStatus = ContractStatus.ACTIVE
    signed_date: date | None = None
    start_date: date | None = None
    end_date: date | None = None
    customer_reference_number: str | None = Field(default=None, max_length=100)
    assigned_to: UUID | None = None
    notes: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return strip_required(v, "Contract name")


class ContractUpdate(PartialUpdate):
    model_config = ConfigDict(use_enum_values=True)
    not_nullable = ("name", "status")

    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    company_id: UUID | None = None
    value: float | None = Field(default=None, ge=0)
    status: ContractStatus | None = None
    signed_date: date | None = None
    start_date: date | None = None
    end_date: date | None = None
    customer_reference_number: str | None = Field(default=None, max_length=100)
    assigned_to: UUID | None = None
    notes: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        return strip_optional_required(v, "Contract name")


class ContractRead(BaseModel):
    id: UUID
    name: str
    description: str | None
    deal_id: UUID | None
    company_id: UUID | None
    value: float | None
    status: str
    signed_date: date | None
    start_date: date | None
    end_date: date | None
    customer_reference_number: str | None
    assigned_to: UUID | None
    notes: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class QuoteCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    name: str = Field(min_length=1, max_length=200)
    reference_number: str | None = Field(default=None, max_length=100)
    deal_id: UUID | None = None
    contact_id: UUID | None = None
    status: QuoteStatus = QuoteStatus.DRAFT
    total_amount: float | None = Field(default=None, ge=0)
    expiry_date: date | None = None
    notes: str | None = None
    assigned_to: UUID | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return strip_required(v, "Quote name")


class QuoteUpdate(PartialUpdate):
    model_config = ConfigDict(use_enum_values=True)
    not_nullable = ("name", "status")

    name: str | None = Field(default=None, min_length=1, max_length=200)
    reference_number: str | None = Field(default=None, max_length=100)
    deal_id: UUID | None = None
    contact_id: UUID | None = None
    status: QuoteStatus | None = None
    total_amount: float | None = Field(default=None, ge=0)
    expiry_date: date | None = None
    notes: str | None = None
    assigned_to: UUID | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        return strip_optional_required(v, "Quote name")


class QuoteRead(BaseModel):
    id: UUID
    name: str
    reference_number: str | None
    deal_id: UUID | None
    contact_id: UUID | None
    status: str
    total_amount: float | None
    expiry_date: date | None
    notes: str | None
    created_by: UUID | None
    assigned_to: UUID | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class DealConvertResult(BaseModel):
    contract: ContractRead
    points_awarded: int = 0
