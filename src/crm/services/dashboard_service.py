"""Per-tenant dashboard counters."""

from uuid import UUID

from src.crm.repositories import (
    CompanyRepository,
    ContactRepository,
    ContractRepository,
    DealRepository,
    TodoRepository,
)
from src.crm.services.notification_service import NotificationService
from src.crm.services.reward_service import RewardService


class DashboardService:
    def __init__(
        self,
        contact_repo: ContactRepository,
        company_repo: CompanyRepository,
        deal_repo: DealRepository,
        contract_repo: ContractRepository,
        todo_repo: TodoRepository,
        notification_service: NotificationService,
        reward_service: RewardService,
    ):
        self.contact_repo = contact_repo
        self.company_repo = company_repo
        self.deal_repo = deal_repo
        self.contract_repo = contract_repo
        self.todo_repo = todo_repo
        self.notification_service = notification_service
        self.reward_service = reward_service

    async def summary(self, user_id: UUID) -> dict[str, int | float]:
        return {
            "contacts": await self.contact_repo.count(),
            "companies": await self.company_repo.count(),
            "open_deals": await self.deal_repo.count_open(),
            "open_deal_value": await self.deal_repo.sum_open_value(),
            "active_contracts": await self.contract_repo.count_active(),
            "my_open_todos": await self.todo_repo.count_open_for_user(user_id),
            "my_unread_notifications": await self.notification_service.unread_count(user_id),
            "my_points": await self.reward_service.get_total_points(user_id),
        }
