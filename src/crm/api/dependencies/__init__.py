"""FastAPI dependency injection definitions.

Routes import everything they need from here.
"""

# Auth
from src.crm.api.dependencies.auth import (
    AdminUser,
    AuthenticatedUser,
    CurrentMembership,
    CurrentUser,
    get_authenticated_user,
    get_current_membership,
    get_current_user,
    require_admin_role,
)

# Database
from src.crm.api.dependencies.db import DBSession, get_db_session

# Services
from src.crm.api.dependencies.services import (
    CompanyServiceDep,
    ContactServiceDep,
    ContractServiceDep,
    DashboardServiceDep,
    DealServiceDep,
    DeviceServiceDep,
    DeviceTemplateServiceDep,
    InvitationServiceDep,
    InvitationServicePublicDep,
    NotificationServiceDep,
    ProfileServiceDep,
    QuoteServiceDep,
    ReportServiceDep,
    RewardServiceDep,
    ScheduledReportServiceDep,
    TenantServiceDep,
    TodoServiceDep,
)

# Tenant
from src.crm.api.dependencies.tenant import (
    ValidatedTenant,
    get_tenant_id_from_header,
    get_validated_tenant,
)

__all__ = [
    # Database
    "DBSession",
    "get_db_session",
    # Tenant
    "ValidatedTenant",
    "get_tenant_id_from_header",
    "get_validated_tenant",
    # Auth
    "AdminUser",
    "AuthenticatedUser",
    "CurrentMembership",
    "CurrentUser",
    "get_authenticated_user",
    "get_current_membership",
    "get_current_user",
    "require_admin_role",
    # Services
    "CompanyServiceDep",
    "ContactServiceDep",
    "ContractServiceDep",
    "DashboardServiceDep",
    "DealServiceDep",
    "DeviceServiceDep",
    "DeviceTemplateServiceDep",
    "InvitationServiceDep",
    "InvitationServicePublicDep",
    "NotificationServiceDep",
    "ProfileServiceDep",
    "QuoteServiceDep",
    "ReportServiceDep",
    "RewardServiceDep",
    "ScheduledReportServiceDep",
    "TenantServiceDep",
    "TodoServiceDep",
]
