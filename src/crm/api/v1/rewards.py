"""Reward points endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status

from src.crm.api.dependencies import AdminUser, CurrentMembership, CurrentUser, RewardServiceDep
from src.crm.schemas.pagination import PaginatedResponse
from src.crm.schemas.reward import (
    CycleRead,
    CycleStart,
    MyPointsResponse,
    ParticipationRead,
    ParticipationUpdate,
    RewardConfigurationRead,
    RewardConfigurationUpsert,
    RewardTransactionRead,
)

router = APIRouter(prefix="/rewards", tags=["rewards"])


@router.get(
    "/me",
    response_model=MyPointsResponse,
    summary="My points",
    description="Total points and the target for the current cycle, created on first read.",
)
async def my_points(user: CurrentUser, service: RewardServiceDep) -> MyPointsResponse:
    return MyPointsResponse.model_validate(await service.get_my_points(user.id))


@router.get(
    "/transactions",
    response_model=PaginatedResponse[RewardTransactionRead],
    summary="List point transactions",
    description="The current user's transactions; admins may pass user_id.",
)
async def list_transactions(
    user: CurrentUser,
    membership: CurrentMembership,
    service: RewardServiceDep,
    cursor: Annotated[str | None, Query(description="Cursor for pagination")] = None,
    limit: Annotated[int, Query(ge=1, le=100, description="Max items to return")] = 50,
    user_id: Annotated[UUID | None, Query(description="Admins only")] = None,
) -> PaginatedResponse[RewardTransactionRead]:
    if user_id is not None and user_id != user.id and not membership.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin role required for this operation",
        )
    page = await service.list_transactions(cursor, limit, user_id=user_id or user.id)
    return PaginatedResponse[RewardTransactionRead].from_page(page, RewardTransactionRead)


@router.get(
    "/configurations",
    response_model=list[RewardConfigurationRead],
    summary="List reward configurations",
)
async def list_configurations(
    user: CurrentUser, service: RewardServiceDep
) -> list[RewardConfigurationRead]:
    return [RewardConfigurationRead.model_validate(c) for c in await service.list_configurations()]


@router.put(
    "/configurations",
    response_model=RewardConfigurationRead,
    summary="Set points for an action",
    description="Create or update the configuration of one action. Admin role required.",
)
async def upsert_configuration(
    request: RewardConfigurationUpsert,
    admin_user: AdminUser,
    service: RewardServiceDep,
) -> RewardConfigurationRead:
    config = await service.upsert_configuration(
        request.action_name,
        request.points_value,
        is_active=request.is_active,
        action_description=request.action_description,
    )
    return RewardConfigurationRead.model_validate(config)


@router.put(
    "/participation",
    response_model=ParticipationRead,
    summary="Set user participation",
    description="Only participating users earn points. Admin role required.",
)
async def set_participation(
    request: ParticipationUpdate,
    admin_user: AdminUser,
    service: RewardServiceDep,
) -> ParticipationRead:
    participation = await service.set_participation(request.user_id, request.active)
    return ParticipationRead.model_validate(participation)


@router.post(
    "/cycles",
    response_model=CycleRead,
    status_code=status.HTTP_201_CREATED,
    summary="Start a period cycle",
    description="The new cycle becomes current. Admin role required.",
)
async def start_cycle(
    request: CycleStart,
    admin_user: AdminUser,
    service: RewardServiceDep,
) -> CycleRead:
    cycle = await service.start_cycle(request.period_type, request.start_date)
    return CycleRead.model_validate(cycle)
