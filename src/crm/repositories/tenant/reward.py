"""Repository for the reward point tables of one tenant."""

from uuid import UUID

from sqlalchemy import update
from sqlmodel import select

from src.crm.models.tenant import (
    RewardConfiguration,
    RewardPeriodCycle,
    RewardPointTransaction,
    UserRewardParticipation,
    UserRewardPoints,
    UserRewardTarget,
)
from src.crm.repositories.base import TenantScopedRepository


class RewardRepository(TenantScopedRepository[RewardPointTransaction]):
    """Paginates the transaction ledger; the other reward tables are read by key."""

    model = RewardPointTransaction

    async def get_participation(self, user_id: UUID) -> UserRewardParticipation | None:
        result = await self.session.execute(
            select(UserRewardParticipation).where(
                UserRewardParticipation.tenant_id == self.tenant_id,
                UserRewardParticipation.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    async def get_configuration(self, action_name: str) -> RewardConfiguration | None:
        result = await self.session.execute(
            select(RewardConfiguration).where(
                RewardConfiguration.tenant_id == self.tenant_id,
                RewardConfiguration.action_name == action_name,
            )
        )
        return result.scalar_one_or_none()

    async def list_configurations(self) -> list[RewardConfiguration]:
        result = await self.session.execute(
            select(RewardConfiguration)
            .where(RewardConfiguration.tenant_id == self.tenant_id)
            .order_by(RewardConfiguration.action_name)
        )
        return list(result.scalars().all())

    async def get_points(self, user_id: UUID) -> UserRewardPoints | None:
        result = await self.session.execute(
            select(UserRewardPoints).where(
                UserRewardPoints.tenant_id == self.tenant_id,
                UserRewardPoints.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    async def get_current_cycle(self) -> RewardPeriodCycle | None:
        result = await self.session.execute(
            select(RewardPeriodCycle)
            .where(
                RewardPeriodCycle.tenant_id == self.tenant_id,
                RewardPeriodCycle.is_current == True,  # noqa: E712
            )
            .order_by(RewardPeriodCycle.start_date.desc())  # type: ignore[attr-defined]
        )
        return result.scalars().first()

    async def clear_current_cycles(self) -> None:
        await self.session.execute(
            update(RewardPeriodCycle)
            .where(RewardPeriodCycle.tenant_id == self.tenant_id)  # type: ignore[arg-type]
            .where(RewardPeriodCycle.is_current == True)  # type: ignore[arg-type]  # noqa: E712
            .values(is_current=False)
        )

    async def get_target(self, user_id: UUID, cycle_id: UUID) -> UserRewardTarget | None:
        result = await self.session.execute(
            select(UserRewardTarget).where(
                UserRewardTarget.tenant_id == self.tenant_id,
                UserRewardTarget.user_id == user_id,
                UserRewardTarget.cycle_id == cycle_id,
            )
        )
        return result.scalar_one_or_none()
