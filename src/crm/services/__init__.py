"""Service layer: business rules and transaction control."""

from src.crm.services.dashboard_service import DashboardService
from src.crm.services.deal_service import DealService
from src.crm.services.device_service import DeviceService, DeviceTemplateService
from src.crm.services.entity_service import EntityService
from src.crm.services.invitation_service import InvitationService
from src.crm.services.notification_service import NotificationService
from src.crm.services.profile_service import ProfileService
from src.crm.services.report_service import ReportService
from src.crm.services.reward_service import RewardService
from src.crm.services.scheduled_report_service import (
    ScheduledReportService,
    run_due_scheduled_reports,
    trigger_due_run,
)
from src.crm.services.tenant_service import TenantService
from src.crm.services.todo_service import TodoService

__all__ = [
    "DashboardService",
    "DealService",
    "DeviceService",
    "DeviceTemplateService",
    "EntityService",
    "InvitationService",
    "NotificationService",
    "ProfileService",
    "ReportService",
    "RewardService",
    "ScheduledReportService",
    "TenantService",
    "TodoService",
    "run_due_scheduled_reports",
    "trigger_due_run",
]
