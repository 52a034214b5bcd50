"""Repositories for companies and contacts."""

from src.crm.models.tenant import Company, Contact
from src.crm.repositories.base import TenantScopedRepository


class CompanyRepository(TenantScopedRepository[Company]):
    model = Company
    search_fields = ("name", "industry")


class ContactRepository(TenantScopedRepository[Contact]):
    model = Contact
    search_fields = ("first_name", "last_name", "email")
