"""Deal pipeline: stage moves and conversion into contracts."""

from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.crm.core.exceptions import ConflictError
from src.crm.core.logging import get_logger
from src.crm.models.base import utc_now
from src.crm.models.enums import ContractStatus, DealStatus, NotificationType, RewardAction
from src.crm.models.tenant import Contract, Deal
from src.crm.repositories import ContractRepository, DealRepository
from src.crm.services.entity_service import EntityService
from src.crm.services.notification_service import NotificationService
from src.crm.services.reward_service import RewardService

logger = get_logger(__name__)


def contract_draft(deal: Deal) -> dict[str, Any]:
    """Contract fields prefilled from a deal."""
    return {
        "name": deal.name,
        "value": deal.value,
        "deal_id": deal.id,
        "company_id": deal.company_id,
        "assigned_to": deal.assigned_to,
    }


class DealService(EntityService[Deal]):
    def __init__(
        self,
        deal_repo: DealRepository,
        contract_repo: ContractRepository,
        session: AsyncSession,
        reward_service: RewardService,
        notification_service: NotificationService | None = None,
    ):
        super().__init__(
            deal_repo,
            session,
            "Deal",
            reward_service=reward_service,
            create_action=RewardAction.CREATE_DEAL.value,
        )
        self.contract_repo = contract_repo
        self.notification_service = notification_service

    async def move(
        self, deal_id: UUID, status: str, probability: int, user_id: UUID
    ) -> tuple[Deal, int, dict[str, Any] | None]:
        """Move a deal to a new stage.

        Returns:
            (deal, points_awarded, contract_draft). The draft is only set when
            the move reaches probability 100 or status won.
        """
        deal = await self.get(deal_id)
        was_won = deal.is_won
        try:
            deal.status = status
            deal.probability = probability
            deal.updated_at = utc_now()
            self.session.add(deal)
            points = await self._award(user_id, RewardAction.MOVE_DEAL_STAGE.value, deal)
            await self.session.commit()
            await self.session.refresh(deal)
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to move deal", deal_id=str(deal_id), error=str(e))
            raise

        logger.info("Deal moved", deal_id=str(deal_id), status=status, probability=probability)

        if not deal.is_won:
            return deal, points, None
        if not was_won:
            await self._notify_won(deal, user_id)
        return deal, points, contract_draft(deal)

    async def convert(self, deal_id: UUID, user_id: UUID) -> tuple[Contract, int]:
        """Create the contract for a deal and mark the deal won.

        Raises:
            ConflictError: If the deal already has a contract.
        """
        deal = await self.get(deal_id)
        if await self.contract_repo.get_by_deal(deal.id) is not None:
            raise ConflictError("Deal already has a contract")

        try:
            contract = Contract(
                tenant_id=self.tenant_id,
                status=ContractStatus.ACTIVE.value,
                **contract_draft(deal),
            )
            self.contract_repo.add(contract)
            deal.status = DealStatus.WON.value
            deal.probability = 100
            deal.updated_at = utc_now()
            self.session.add(deal)
            await self.session.flush()
            points = await self._award(
                user_id, RewardAction.CONVERT_DEAL_TO_CONTRACT.value, deal
            )
            await self.session.commit()
            await self.session.refresh(contract)
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to convert deal", deal_id=str(deal_id), error=str(e))
            raise

        logger.info("Deal converted", deal_id=str(deal_id), contract_id=str(contract.id))
        return contract, points

    async def _notify_won(self, deal: Deal, user_id: UUID) -> None:
        if self.notification_service is None:
            return
        if deal.assigned_to is None or deal.assigned_to == user_id:
            return
        await self.notification_service.notify(
            deal.assigned_to,
            "Deal won",
            f'Deal "{deal.name}" was marked as won.',
            NotificationType.DEAL_WON.value,
            entity_type="deals",
            entity_id=deal.id,
        )
