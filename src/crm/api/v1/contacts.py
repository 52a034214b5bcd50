"""Contact and company endpoints."""

from src.crm.api.dependencies.services import get_company_service, get_contact_service
from src.crm.api.v1.crud import build_crud_router
from src.crm.schemas.contact import (
    CompanyCreate,
    CompanyRead,
    CompanyUpdate,
    ContactCreate,
    ContactRead,
    ContactUpdate,
)

contacts_router = build_crud_router(
    prefix="contacts",
    label="Contact",
    get_service=get_contact_service,
    create_schema=ContactCreate,
    update_schema=ContactUpdate,
    read_schema=ContactRead,
)

companies_router = build_crud_router(
    prefix="companies",
    label="Company",
    get_service=get_company_service,
    create_schema=CompanyCreate,
    update_schema=CompanyUpdate,
    read_schema=CompanyRead,
)
