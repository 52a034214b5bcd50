"""Repository layer - data access abstraction."""

from src.crm.repositories.base import BaseRepository, TenantScopedRepository
from src.crm.repositories.public import (
    MembershipRepository,
    ProfileRepository,
    TenantInvitationRepository,
    TenantRepository,
    UserEmailRepository,
)
from src.crm.repositories.tenant import (
    CompanyRepository,
    ContactRepository,
    ContractRepository,
    DealRepository,
    DeviceRepository,
    DeviceTemplateRepository,
    NotificationPreferenceRepository,
    NotificationRepository,
    QuoteRepository,
    ReportDataRepository,
    ReportRepository,
    RewardRepository,
    ScheduledReportQueueRepository,
    ScheduledReportRepository,
    TodoRepository,
)

__all__ = [
    # Base
    "BaseRepository",
    "TenantScopedRepository",
    # Identity and tenancy
    "MembershipRepository",
    "ProfileRepository",
    "TenantInvitationRepository",
    "TenantRepository",
    "UserEmailRepository",
    # Tenant-scoped
    "CompanyRepository",
    "ContactRepository",
    "ContractRepository",
    "DealRepository",
    "DeviceRepository",
    "DeviceTemplateRepository",
    "NotificationPreferenceRepository",
    "NotificationRepository",
    "QuoteRepository",
    "ReportDataRepository",
    "ReportRepository",
    "RewardRepository",
    "ScheduledReportQueueRepository",
    "ScheduledReportRepository",
    "TodoRepository",
]
