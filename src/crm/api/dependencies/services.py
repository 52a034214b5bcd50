"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.crm.api.dependencies.db import DBSession
from src.crm.api.dependencies.repositories import (
    CompanyRepo,
    ContactRepo,
    ContractRepo,
    DealRepo,
    DeviceRepo,
    DeviceTemplateRepo,
    InvitationRepo,
    MembershipRepo,
    NotificationPreferenceRepo,
    NotificationRepo,
    ProfileRepo,
    QuoteRepo,
    ReportDataRepo,
    ReportRepo,
    RewardRepo,
    ScheduledReportRepo,
    TenantRepo,
    TodoRepo,
    UserEmailRepo,
)
from src.crm.api.dependencies.tenant import ValidatedTenant
from src.crm.models import Company, Contact, Contract, Quote
from src.crm.models.enums import RewardAction
from src.crm.services import (
    DashboardService,
    DealService,
    DeviceService,
    DeviceTemplateService,
    EntityService,
    InvitationService,
    NotificationService,
    ProfileService,
    ReportService,
    RewardService,
    ScheduledReportService,
    TenantService,
    TodoService,
)


def get_reward_service(reward_repo: RewardRepo, session: DBSession) -> RewardService:
    return RewardService(reward_repo, session)


RewardServiceDep = Annotated[RewardService, Depends(get_reward_service)]


def get_notification_service(
    notification_repo: NotificationRepo,
    preference_repo: NotificationPreferenceRepo,
    session: DBSession,
) -> NotificationService:
    return NotificationService(notification_repo, preference_repo, session)


NotificationServiceDep = Annotated[NotificationService, Depends(get_notification_service)]


def get_company_service(
    repo: CompanyRepo, session: DBSession, reward_service: RewardServiceDep
) -> EntityService[Company]:
    return EntityService(
        repo,
        session,
        "Company",
        reward_service=reward_service,
        create_action=RewardAction.CREATE_COMPANY.value,
    )


def get_contact_service(
    repo: ContactRepo, session: DBSession, reward_service: RewardServiceDep
) -> EntityService[Contact]:
    return EntityService(
        repo,
        session,
        "Contact",
        reward_service=reward_service,
        create_action=RewardAction.CREATE_CONTACT.value,
    )


def get_contract_service(repo: ContractRepo, session: DBSession) -> EntityService[Contract]:
    return EntityService(repo, session, "Contract")


def get_quote_service(repo: QuoteRepo, session: DBSession) -> EntityService[Quote]:
    return EntityService(repo, session, "Quote")


def get_deal_service(
    deal_repo: DealRepo,
    contract_repo: ContractRepo,
    session: DBSession,
    reward_service: RewardServiceDep,
    notification_service: NotificationServiceDep,
) -> DealService:
    return DealService(deal_repo, contract_repo, session, reward_service, notification_service)


def get_todo_service(
    todo_repo: TodoRepo,
    session: DBSession,
    reward_service: RewardServiceDep,
    notification_service: NotificationServiceDep,
) -> TodoService:
    return TodoService(todo_repo, session, reward_service, notification_service)


def get_device_service(device_repo: DeviceRepo, session: DBSession) -> DeviceService:
    return DeviceService(device_repo, session)


def get_device_template_service(
    template_repo: DeviceTemplateRepo, session: DBSession
) -> DeviceTemplateService:
    return DeviceTemplateService(template_repo, session)


def get_report_service(
    report_repo: ReportRepo, data_repo: ReportDataRepo, session: DBSession
) -> ReportService:
    return ReportService(report_repo, data_repo, session)


ReportServiceDep = Annotated[ReportService, Depends(get_report_service)]


def get_scheduled_report_service(
    scheduled_repo: ScheduledReportRepo,
    report_service: ReportServiceDep,
    session: DBSession,
) -> ScheduledReportService:
    return ScheduledReportService(scheduled_repo, report_service, session)


def get_profile_service(
    profile_repo: ProfileRepo, email_repo: UserEmailRepo, session: DBSession
) -> ProfileService:
    return ProfileService(profile_repo, email_repo, session)


def get_tenant_service(
    tenant_repo: TenantRepo, membership_repo: MembershipRepo, session: DBSession
) -> TenantService:
    return TenantService(tenant_repo, membership_repo, session)


def get_invitation_service(
    invitation_repo: InvitationRepo,
    email_repo: UserEmailRepo,
    membership_repo: MembershipRepo,
    tenant_repo: TenantRepo,
    session: DBSession,
    tenant: ValidatedTenant,
) -> InvitationService:
    """Invitation service with tenant context (for admin operations)."""
    return InvitationService(
        invitation_repo, email_repo, membership_repo, tenant_repo, session, tenant.id
    )


def get_invitation_service_public(
    invitation_repo: InvitationRepo,
    email_repo: UserEmailRepo,
    membership_repo: MembershipRepo,
    tenant_repo: TenantRepo,
    session: DBSession,
) -> InvitationService:
    """Invitation service without tenant context (token-based endpoints)."""
    return InvitationService(invitation_repo, email_repo, membership_repo, tenant_repo, session)


def get_dashboard_service(
    contact_repo: ContactRepo,
    company_repo: CompanyRepo,
    deal_repo: DealRepo,
    contract_repo: ContractRepo,
    todo_repo: TodoRepo,
    notification_service: NotificationServiceDep,
    reward_service: RewardServiceDep,
) -> DashboardService:
    return DashboardService(
        contact_repo,
        company_repo,
        deal_repo,
        contract_repo,
        todo_repo,
        notification_service,
        reward_service,
    )


CompanyServiceDep = Annotated[EntityService[Company], Depends(get_company_service)]
ContactServiceDep = Annotated[EntityService[Contact], Depends(get_contact_service)]
ContractServiceDep = Annotated[EntityService[Contract], Depends(get_contract_service)]
QuoteServiceDep = Annotated[EntityService[Quote], Depends(get_quote_service)]
DealServiceDep = Annotated[DealService, Depends(get_deal_service)]
TodoServiceDep = Annotated[TodoService, Depends(get_todo_service)]
DeviceServiceDep = Annotated[DeviceService, Depends(get_device_service)]
DeviceTemplateServiceDep = Annotated[DeviceTemplateService, Depends(get_device_template_service)]
ScheduledReportServiceDep = Annotated[
    ScheduledReportService, Depends(get_scheduled_report_service)
]
ProfileServiceDep = Annotated[ProfileService, Depends(get_profile_service)]
TenantServiceDep = Annotated[TenantService, Depends(get_tenant_service)]
InvitationServiceDep = Annotated[InvitationService, Depends(get_invitation_service)]
InvitationServicePublicDep = Annotated[
    InvitationService, Depends(get_invitation_service_public)
]
DashboardServiceDep = Annotated[DashboardService, Depends(get_dashboard_service)]
