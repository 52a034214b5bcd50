"""Repository factory dependencies.

Tenant-scoped repositories are bound to the validated X-Tenant-ID tenant, so a
route can never read another tenant's rows.
"""

from typing import Annotated

from fastapi import Depends

from src.crm.api.dependencies.db import DBSession
from src.crm.api.dependencies.tenant import ValidatedTenant
from src.crm.repositories import (
    CompanyRepository,
    ContactRepository,
    ContractRepository,
    DealRepository,
    DeviceRepository,
    DeviceTemplateRepository,
    MembershipRepository,
    NotificationPreferenceRepository,
    NotificationRepository,
    ProfileRepository,
    QuoteRepository,
    ReportDataRepository,
    ReportRepository,
    RewardRepository,
    ScheduledReportRepository,
    TenantInvitationRepository,
    TenantRepository,
    TodoRepository,
    UserEmailRepository,
)


def get_profile_repository(session: DBSession) -> ProfileRepository:
    return ProfileRepository(session)


def get_user_email_repository(session: DBSession) -> UserEmailRepository:
    return UserEmailRepository(session)


def get_membership_repository(session: DBSession) -> MembershipRepository:
    return MembershipRepository(session)


def get_tenant_repository(session: DBSession) -> TenantRepository:
    return TenantRepository(session)


def get_invitation_repository(session: DBSession) -> TenantInvitationRepository:
    return TenantInvitationRepository(session)


def get_company_repository(session: DBSession, tenant: ValidatedTenant) -> CompanyRepository:
    return CompanyRepository(session, tenant.id)


def get_contact_repository(session: DBSession, tenant: ValidatedTenant) -> ContactRepository:
    return ContactRepository(session, tenant.id)


def get_deal_repository(session: DBSession, tenant: ValidatedTenant) -> DealRepository:
    return DealRepository(session, tenant.id)


def get_contract_repository(session: DBSession, tenant: ValidatedTenant) -> ContractRepository:
    return ContractRepository(session, tenant.id)


def get_quote_repository(session: DBSession, tenant: ValidatedTenant) -> QuoteRepository:
    return QuoteRepository(session, tenant.id)


def get_todo_repository(session: DBSession, tenant: ValidatedTenant) -> TodoRepository:
    return TodoRepository(session, tenant.id)


def get_notification_repository(
    session: DBSession, tenant: ValidatedTenant
) -> NotificationRepository:
    return NotificationRepository(session, tenant.id)


def get_notification_preference_repository(
    session: DBSession, tenant: ValidatedTenant
) -> NotificationPreferenceRepository:
    return NotificationPreferenceRepository(session, tenant.id)


def get_reward_repository(session: DBSession, tenant: ValidatedTenant) -> RewardRepository:
    return RewardRepository(session, tenant.id)


def get_device_repository(session: DBSession, tenant: ValidatedTenant) -> DeviceRepository:
    return DeviceRepository(session, tenant.id)


def get_device_template_repository(
    session: DBSession, tenant: ValidatedTenant
) -> DeviceTemplateRepository:
    return DeviceTemplateRepository(session, tenant.id)


def get_report_repository(session: DBSession, tenant: ValidatedTenant) -> ReportRepository:
    return ReportRepository(session, tenant.id)


def get_report_data_repository(
    session: DBSession, tenant: ValidatedTenant
) -> ReportDataRepository:
    return ReportDataRepository(session, tenant.id)


def get_scheduled_report_repository(
    session: DBSession, tenant: ValidatedTenant
) -> ScheduledReportRepository:
    return ScheduledReportRepository(session, tenant.id)


ProfileRepo = Annotated[ProfileRepository, Depends(get_profile_repository)]
UserEmailRepo = Annotated[UserEmailRepository, Depends(get_user_email_repository)]
MembershipRepo = Annotated[MembershipRepository, Depends(get_membership_repository)]
TenantRepo = Annotated[TenantRepository, Depends(get_tenant_repository)]
InvitationRepo = Annotated[TenantInvitationRepository, Depends(get_invitation_repository)]
CompanyRepo = Annotated[CompanyRepository, Depends(get_company_repository)]
ContactRepo = Annotated[ContactRepository, Depends(get_contact_repository)]
DealRepo = Annotated[DealRepository, Depends(get_deal_repository)]
ContractRepo = Annotated[ContractRepository, Depends(get_contract_repository)]
QuoteRepo = Annotated[QuoteRepository, Depends(get_quote_repository)]
TodoRepo = Annotated[TodoRepository, Depends(get_todo_repository)]
NotificationRepo = Annotated[NotificationRepository, Depends(get_notification_repository)]
NotificationPreferenceRepo = Annotated[
    NotificationPreferenceRepository, Depends(get_notification_preference_repository)
]
RewardRepo = Annotated[RewardRepository, Depends(get_reward_repository)]
DeviceRepo = Annotated[DeviceRepository, Depends(get_device_repository)]
DeviceTemplateRepo = Annotated[DeviceTemplateRepository, Depends(get_device_template_repository)]
ReportRepo = Annotated[ReportRepository, Depends(get_report_repository)]
ReportDataRepo = Annotated[ReportDataRepository, Depends(get_report_data_repository)]
ScheduledReportRepo = Annotated[
    ScheduledReportRepository, Depends(get_scheduled_report_repository)
]
