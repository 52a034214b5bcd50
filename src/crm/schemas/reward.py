"""Reward points schemas."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.crm.models.enums import PeriodType


class RewardTargetRead(BaseModel):
    cycle_id: UUID
    period_type: str
    start_date: date
    end_date: date
    target_points: int
    current_points: int
    achieved: bool


class MyPointsResponse(BaseModel):
    total_points: int
    current_target: RewardTargetRead | None = None


class RewardConfigurationUpsert(BaseModel):
    action_name: str = Field(min_length=1, max_length=100)
    action_description: str | None = Field(default=None, max_length=500)
    points_value: int = Field(ge=0)
    is_active: bool = True


class RewardConfigurationRead(BaseModel):
    id: UUID
    action_name: str
    action_description: str | None
    points_value: int
    is_active: bool

    model_config = {"from_attributes": True}


class ParticipationUpdate(BaseModel):
    user_id: UUID
    active: bool


class ParticipationRead(BaseModel):
    user_id: UUID
    active: bool

    model_config = {"from_attributes": True}


class CycleStart(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    period_type: PeriodType = PeriodType.MONTHLY
    start_date: date | None = Field(
        default=None, description="Defaults to today (UTC)."
    )


class CycleRead(BaseModel):
    id: UUID
    period_type: str
    start_date: date
    end_date: date
    is_current: bool

    model_config = {"from_attributes": True}


class RewardTransactionRead(BaseModel):
    id: UUID
    user_id: UUID
    action_name: str
    points_earned: int
    entity_type: str | None
    entity_id: UUID | None
    notes: str | None
    created_at: datetime

    model_config = {"from_attributes": True}
