"""Reward points: configuration, ledger, balances and period targets."""

from datetime import date
from uuid import UUID

from sqlalchemy import UniqueConstraint
from sqlmodel import Field

from src.crm.models.base import TenantScopedModel
from src.crm.models.enums import PeriodType

DEFAULT_TARGET_POINTS = 100


class RewardConfiguration(TenantScopedModel, table=True):
    """Points granted per action name within a tenant."""

    __tablename__ = "reward_configurations"
    __table_args__ = (UniqueConstraint("tenant_id", "action_name", name="uq_reward_config_action"),)

    action_name: str = Field(max_length=100)
    action_description: str | None = Field(default=None, max_length=500)
    points_value: int = Field(default=0)
    is_active: bool = Field(default=True)


class UserRewardParticipation(TenantScopedModel, table=True):
    """Opt-in flag; users without an active row never earn points."""

    __tablename__ = "user_reward_participation"
    __table_args__ = (UniqueConstraint("user_id", "tenant_id", name="uq_reward_participation"),)

    user_id: UUID = Field(foreign_key="profiles.id", index=True)
    active: bool = Field(default=True)


class RewardPointTransaction(TenantScopedModel, table=True):
    """Append-only ledger of awarded points."""

    __tablename__ = "reward_point_transactions"

    user_id: UUID = Field(foreign_key="profiles.id", index=True)
    action_name: str = Field(max_length=100)
    points_earned: int
    entity_type: str | None = Field(default=None, max_length=50)
    entity_id: UUID | None = Field(default=None)
    notes: str | None = Field(default=None, max_length=500)


class UserRewardPoints(TenantScopedModel, table=True):
    """Running balance per user and tenant."""

    __tablename__ = "user_reward_points"
    __table_args__ = (UniqueConstraint("user_id", "tenant_id", name="uq_reward_points_user"),)

    user_id: UUID = Field(foreign_key="profiles.id", index=True)
    total_points: int = Field(default=0)


class RewardPeriodCycle(TenantScopedModel, table=True):
    """A weekly or monthly target window; at most one is current per tenant."""

    __tablename__ = "reward_period_cycles"

    period_type: str = Field(default=PeriodType.MONTHLY.value, max_length=20)
    start_date: date
    end_date: date
    is_current: bool = Field(default=False, index=True)


class UserRewardTarget(TenantScopedModel, table=True):
    """Progress of one user toward the target of one cycle."""

    __tablename__ = "user_reward_targets"
    __table_args__ = (
        UniqueConstraint("user_id", "tenant_id", "cycle_id", name="uq_reward_target_cycle"),
    )

    user_id: UUID = Field(foreign_key="profiles.id", index=True)
    cycle_id: UUID = Field(foreign_key="reward_period_cycles.id", index=True)
    target_points: int = Field(default=DEFAULT_TARGET_POINTS)
    current_points: int = Field(default=0)
    achieved: bool = Field(default=False)
