"""Tenant-scoped models. Every table here is filtered by tenant_id."""

from src.crm.models.tenant.contact import Company, Contact
from src.crm.models.tenant.deal import Contract, Deal, Quote
from src.crm.models.tenant.device import Device, DeviceTemplate
from src.crm.models.tenant.notification import Notification, NotificationPreference
from src.crm.models.tenant.report import Report, ScheduledReport
from src.crm.models.tenant.reward import (
    DEFAULT_TARGET_POINTS,
    RewardConfiguration,
    RewardPeriodCycle,
    RewardPointTransaction,
    UserRewardParticipation,
    UserRewardPoints,
    UserRewardTarget,
)
from src.crm.models.tenant.todo import Todo

__all__ = [
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
