"""Tenant-scoped repositories."""

from src.crm.repositories.tenant.contact import CompanyRepository, ContactRepository
from src.crm.repositories.tenant.deal import ContractRepository, DealRepository, QuoteRepository
from src.crm.repositories.tenant.device import DeviceRepository, DeviceTemplateRepository
from src.crm.repositories.tenant.notification import (
    NotificationPreferenceRepository,
    NotificationRepository,
)
from src.crm.repositories.tenant.report import (
    ReportDataRepository,
    ReportRepository,
    ScheduledReportQueueRepository,
    ScheduledReportRepository,
)
from src.crm.repositories.tenant.reward import RewardRepository
from src.crm.repositories.tenant.todo import TodoRepository

__all__ = [
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
