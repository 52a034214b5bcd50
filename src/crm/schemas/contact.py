"""Company and contact schemas for API request/response."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator

from src.crm.schemas.common import (
    PartialUpdate,
    blank_to_none,
    strip_optional_required,
    strip_required,
)


class CompanyCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    website: str | None = Field(default=None, max_length=500)
    industry: str | None = Field(default=None, max_length=100)
    size: str | None = Field(default=None, max_length=50)
    phone: str | None = Field(default=None, max_length=50)
    email: EmailStr | None = None
    notes: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return strip_required(v, "Company name")

    @field_validator("description", "website", "industry", "size", "phone", "notes")
    @classmethod
    def validate_optional_text(cls, v: str | None) -> str | None:
        return blank_to_none(v)


class CompanyUpdate(PartialUpdate):
    not_nullable = ("name", "active")

    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    website: str | None = Field(default=None, max_length=500)
    industry: str | None = Field(default=None, max_length=100)
    size: str | None = Field(default=None, max_length=50)
    phone: str | None = Field(default=None, max_length=50)
    email: EmailStr | None = None
    notes: str | None = None
    active: bool | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        return strip_optional_required(v, "Company name")


class CompanyRead(BaseModel):
    id: UUID
    name: str
    description: str | None
    website: str | None
    industry: str | None
    size: str | None
    phone: str | None
    email: str | None
    notes: str | None
    active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ContactCreate(BaseModel):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=50)
    position: str | None = Field(default=None, max_length=100)
    company_id: UUID | None = None
    notes: str | None = None

    @field_validator("first_name", "last_name")
    @classmethod
    def validate_names(cls, v: str) -> str:
        return strip_required(v, "Contact name")

    @field_validator("phone", "position", "notes")
    @classmethod
    def validate_optional_text(cls, v: str | None) -> str | None:
        return blank_to_none(v)


class ContactUpdate(PartialUpdate):
    not_nullable = ("first_name", "last_name", "active")

    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=50)
    position: str | None = Field(default=None, max_length=100)
    company_id: UUID | None = None
    notes: str | None = None
    active: bool | None = None

    @field_validator("first_name", "last_name")
    @classmethod
    def validate_names(cls, v: str | None) -> str | None:
        return strip_optional_required(v, "Contact name")


class ContactRead(BaseModel):
    id: UUID
    first_name: str
    last_name: str
    full_name: str
    email: str | None
    phone: str | None
    position: str | None
    company_id: UUID | None
    notes: str | None
    active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
