"""Reward points: awarding, balances, cycles and admin configuration."""

from calendar import monthrange
from datetime import date, datetime, timedelta
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.crm.core.logging import get_logger
from src.crm.models.base import utc_now
from src.crm.models.enums import PeriodType
from src.crm.models.tenant import (
    DEFAULT_TARGET_POINTS,
    RewardConfiguration,
    RewardPeriodCycle,
    RewardPointTransaction,
    UserRewardParticipation,
    UserRewardPoints,
    UserRewardTarget,
)
from src.crm.repositories import RewardRepository

logger = get_logger(__name__)


def add_months[T: (date, datetime)](value: T, months: int) -> T:
    """Shift by calendar months, clamping the day to the end of the target month.

    Jan 31 + 1 month is Feb 28 (or 29), never Mar 3.
    """
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def cycle_end(start: date, period_type: str) -> date:
    """Last day (inclusive) of a cycle starting on ``start``."""
    if period_type == PeriodType.WEEKLY.value:
        return start + timedelta(days=6)
    return add_months(start, 1) - timedelta(days=1)


class RewardService:
    """Reward operations for one tenant.

    ``award_points`` only flushes: it runs inside the caller's transaction so
    the points and the action that earned them commit together.
    """

    def __init__(self, reward_repo: RewardRepository, session: AsyncSession):
        self.reward_repo = reward_repo
        self.session = session
        self.tenant_id = reward_repo.tenant_id

    async def award_points(
        self,
        user_id: UUID,
        action_name: str,
        entity_type: str | None = None,
        entity_id: UUID | None = None,
        notes: str | None = None,
    ) -> int:
        """Award the configured points for an action.

        Returns:
            Points awarded, 0 when the user does not participate or the action
            has no active, non-zero configuration.
        """
        participation = await self.reward_repo.get_participation(user_id)
        if participation is None or not participation.active:
            return 0

        config = await self.reward_repo.get_configuration(action_name)
        if config is None or not config.is_active or not config.points_value:
            return 0

        points = config.points_value
        self.session.add(
            RewardPointTransaction(
                tenant_id=self.tenant_id,
                user_id=user_id,
                action_name=action_name,
                points_earned=points,
                entity_type=entity_type,
                entity_id=entity_id,
                notes=notes,
            )
        )

        balance = await self.reward_repo.get_points(user_id)
        if balance is None:
            balance = UserRewardPoints(tenant_id=self.tenant_id, user_id=user_id, total_points=0)
        balance.total_points += points
        balance.updated_at = utc_now()
        self.session.add(balance)

        cycle = await self.reward_repo.get_current_cycle()
        if cycle is not None:
            target = await self.reward_repo.get_target(user_id, cycle.id)
            if target is None:
                target = UserRewardTarget(
                    tenant_id=self.tenant_id,
                    user_id=user_id,
                    cycle_id=cycle.id,
                    target_points=DEFAULT_TARGET_POINTS,
                    current_points=0,
                )
            target.current_points += points
            target.achieved = target.current_points >= target.target_points
            target.updated_at = utc_now()
            self.session.add(target)

        await self.session.flush()
        logger.info("Reward points awarded", user_id=str(user_id), action=action_name, points=points)
        return points

    async def get_my_points(self, user_id: UUID) -> dict[str, Any]:
        """Total points and the target for the current cycle.

        A missing target row for the current cycle is created with the
        default target.
        """
        try:
            balance = await self.reward_repo.get_points(user_id)
            result: dict[str, Any] = {
                "total_points": balance.total_points if balance else 0,
                "current_target": None,
            }

            cycle = await self.reward_repo.get_current_cycle()
            if cycle is None:
                return result

            target = await self.reward_repo.get_target(user_id, cycle.id)
            if target is None:
                target = UserRewardTarget(
                    tenant_id=self.tenant_id,
                    user_id=user_id,
                    cycle_id=cycle.id,
                    target_points=DEFAULT_TARGET_POINTS,
                    current_points=0,
                )
                self.session.add(target)
                await self.session.commit()

            result["current_target"] = {
                "cycle_id": cycle.id,
                "period_type": cycle.period_type,
                "start_date": cycle.start_date,
                "end_date": cycle.end_date,
                "target_points": target.target_points,
                "current_points": target.current_points,
                "achieved": target.achieved,
            }
            return result
        except Exception:
            await self.session.rollback()
            raise

    async def get_total_points(self, user_id: UUID) -> int:
        balance = await self.reward_repo.get_points(user_id)
        return balance.total_points if balance else 0

    async def list_configurations(self) -> list[RewardConfiguration]:
        return await self.reward_repo.list_configurations()

    async def upsert_configuration(
        self,
        action_name: str,
        points_value: int,
        is_active: bool = True,
        action_description: str | None = None,
    ) -> RewardConfiguration:
        try:
            config = await self.reward_repo.get_configuration(action_name)
            if config is None:
                config = RewardConfiguration(tenant_id=self.tenant_id, action_name=action_name)
            config.points_value = points_value
            config.is_active = is_active
            if action_description is not None:
                config.action_description = action_description
            config.updated_at = utc_now()
            self.session.add(config)
            await self.session.commit()
            await self.session.refresh(config)
            logger.info("Reward configuration saved", action=action_name, points=points_value)
            return config
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to save reward configuration", action=action_name, error=str(e))
            raise

    async def set_participation(self, user_id: UUID, active: bool) -> UserRewardParticipation:
        try:
            participation = await self.reward_repo.get_participation(user_id)
            if participation is None:
                participation = UserRewardParticipation(tenant_id=self.tenant_id, user_id=user_id)
            participation.active = active
            participation.updated_at = utc_now()
            self.session.add(participation)
            await self.session.commit()
            await self.session.refresh(participation)
            return participation
        except Exception:
            await self.session.rollback()
            raise

    async def start_cycle(
        self, period_type: str = PeriodType.MONTHLY.value, start_date: date | None = None
    ) -> RewardPeriodCycle:
        """Start a new current cycle; the previous one stops being current."""
        start = start_date or utc_now().date()
        try:
            await self.reward_repo.clear_current_cycles()
            cycle = RewardPeriodCycle(
                tenant_id=self.tenant_id,
                period_type=period_type,
                start_date=start,
                end_date=cycle_end(start, period_type),
                is_current=True,
            )
            self.session.add(cycle)
            await self.session.commit()
            await self.session.refresh(cycle)
            logger.info("Reward cycle started", period_type=period_type, start_date=str(start))
            return cycle
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to start reward cycle", error=str(e))
            raise

    async def list_transactions(
        self, cursor: str | None, limit: int, user_id: UUID | None = None
    ) -> tuple[list[RewardPointTransaction], str | None, bool]:
        return await self.reward_repo.list_page(cursor, limit, user_id=user_id)
