"""Companies and the people working at them."""

from uuid import UUID

from sqlmodel import Field

from src.crm.models.base import SoftDeleteMixin, TenantScopedModel


class Company(TenantScopedModel, SoftDeleteMixin, table=True):
    __tablename__ = "companies"

    name: str = Field(max_length=200, index=True)
    description: str | None = Field(default=None, max_length=2000)
    website: str | None = Field(default=None, max_length=500)
    industry: str | None = Field(default=None, max_length=100)
    size: str | None = Field(default=None, max_length=50)
    phone: str | None = Field(default=None, max_length=50)
    email: str | None = Field(default=None, max_length=255)
    notes: str | None = Field(default=None)
    active: bool = Field(default=True)


class Contact(TenantScopedModel, SoftDeleteMixin, table=True):
    __tablename__ = "contacts"

    first_name: str = Field(max_length=100, index=True)
    last_name: str = Field(max_length=100, index=True)
    email: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=50)
    position: str | None = Field(default=None, max_length=100)
    company_id: UUID | None = Field(default=None, foreign_key="companies.id", index=True)
    notes: str | None = Field(default=None)
    active: bool = Field(default=True)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
