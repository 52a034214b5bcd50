"""Model exports - Lobby Pattern.

Import from here: `from src.crm.models import Contact, Tenant`
"""

from src.crm.models.enums import (
    ContractStatus,
    DealStatus,
    InvitationStatus,
    MembershipRole,
    NotificationType,
    PeriodType,
    Priority,
    QuoteStatus,
    ReportDataSource,
    ReportVisibility,
    RewardAction,
    ScheduleType,
    TemplateImportStatus,
    TodoStatus,
)
from src.crm.models.public import (
    Profile,
    Tenant,
    TenantInvitation,
    UserEmail,
    UserTenantMembership,
)
from src.crm.models.tenant import (
    DEFAULT_TARGET_POINTS,
    Company,
    Contact,
    Contract,
    Deal,
    Device,
    DeviceTemplate,
    Notification,
    NotificationPreference,
    Quote,
    Report,
    RewardConfiguration,
    RewardPeriodCycle,
    RewardPointTransaction,
    ScheduledReport,
    Todo,
    UserRewardParticipation,
    UserRewardPoints,
    UserRewardTarget,
)

__all__ = [
    # Enums
    "ContractStatus",
    "DealStatus",
    "InvitationStatus",
    "MembershipRole",
    "NotificationType",
    "PeriodType",
    "Priority",
    "QuoteStatus",
    "ReportDataSource",
    "ReportVisibility",
    "RewardAction",
    "ScheduleType",
    "TemplateImportStatus",
    "TodoStatus",
    # Identity and tenancy
    "Profile",
    "Tenant",
    "TenantInvitation",
    "UserEmail",
    "UserTenantMembership",
    # Tenant-scoped
    "DEFAULT_TARGET_POINTS",
    "Company",
    "Contact",
    "Contract",
    "Deal",
    "Device",
    "DeviceTemplate",
    "Notification",
    "NotificationPreference",
    "Quote",
    "Report",
    "RewardConfiguration",
    "RewardPeriodCycle",
    "RewardPointTransaction",
    "ScheduledReport",
    "Todo",
    "UserRewardParticipation",
    "UserRewardPoints",
    "UserRewardTarget",
]
