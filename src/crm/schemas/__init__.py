from src.crm.schemas.contact import (
    CompanyCreate,
    CompanyRead,
    CompanyUpdate,
    ContactCreate,
    ContactRead,
    ContactUpdate,
)
from src.crm.schemas.deal import (
    ContractCreate,
    ContractDraft,
    ContractRead,
    ContractUpdate,
    DealConvertResult,
    DealCreate,
    DealMove,
    DealMoveResult,
    DealRead,
    DealUpdate,
    QuoteCreate,
    QuoteRead,
    QuoteUpdate,
)
from src.crm.schemas.pagination import PaginatedResponse
from src.crm.schemas.tenant import TenantCreate, TenantRead
from src.crm.schemas.todo import TodoCreate, TodoRead, TodoUpdate

__all__ = [
    # Pagination
    "PaginatedResponse",
    # Contacts and companies
    "CompanyCreate",
    "CompanyRead",
    "CompanyUpdate",
    "ContactCreate",
    "ContactRead",
    "ContactUpdate",
    # Pipeline
    "ContractCreate",
    "ContractDraft",
    "ContractRead",
    "ContractUpdate",
    "DealConvertResult",
    "DealCreate",
    "DealMove",
    "DealMoveResult",
    "DealRead",
    "DealUpdate",
    "QuoteCreate",
    "QuoteRead",
    "QuoteUpdate",
    # Tenant
    "TenantCreate",
    "TenantRead",
    # Todos
    "TodoCreate",
    "TodoRead",
    "TodoUpdate",
]
