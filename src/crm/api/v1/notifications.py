"""Notification endpoints for the current user in the current tenant."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query

from src.crm.api.dependencies import CurrentUser, NotificationServiceDep
from src.crm.core.exceptions import raise_http_error
from src.crm.schemas.notification import (
    MarkAllReadResponse,
    NotificationPreferenceRead,
    NotificationPreferenceUpdate,
    NotificationRead,
    UnreadCountResponse,
)
from src.crm.schemas.pagination import PaginatedResponse

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get(
    "",
    response_model=PaginatedResponse[NotificationRead],
    summary="List notifications",
)
async def list_notifications(
    user: CurrentUser,
    service: NotificationServiceDep,
    cursor: Annotated[str | None, Query(description="Cursor for pagination")] = None,
    limit: Annotated[int, Query(ge=1, le=100, description="Max items to return")] = 50,
) -> PaginatedResponse[NotificationRead]:
    page = await service.list_page(user.id, cursor, limit)
    return PaginatedResponse[NotificationRead].from_page(page, NotificationRead)


@router.get(
    "/recent",
    response_model=list[NotificationRead],
    summary="Recent notifications",
    description="The latest five notifications, for the dropdown.",
)
async def recent_notifications(
    user: CurrentUser,
    service: NotificationServiceDep,
) -> list[NotificationRead]:
    return [NotificationRead.model_validate(n) for n in await service.recent(user.id)]


@router.get(
    "/unread-count",
    response_model=UnreadCountResponse,
    summary="Unread notification count",
)
async def unread_count(
    user: CurrentUser,
    service: NotificationServiceDep,
) -> UnreadCountResponse:
    return UnreadCountResponse(unread_count=await service.unread_count(user.id))


@router.post(
    "/read-all",
    response_model=MarkAllReadResponse,
    summary="Mark all notifications read",
)
async def mark_all_read(
    user: CurrentUser,
    service: NotificationServiceDep,
) -> MarkAllReadResponse:
    return MarkAllReadResponse(updated=await service.mark_all_read(user.id))


@router.get(
    "/preferences",
    response_model=list[NotificationPreferenceRead],
    summary="List notification preferences",
)
async def list_preferences(
    user: CurrentUser,
    service: NotificationServiceDep,
) -> list[NotificationPreferenceRead]:
    preferences = await service.list_preferences(user.id)
    return [NotificationPreferenceRead.model_validate(p) for p in preferences]


@router.put(
    "/preferences",
    response_model=NotificationPreferenceRead,
    summary="Set notification preference",
    description="Enable or disable one notification type. Disabled types are not created.",
)
async def set_preference(
    request: NotificationPreferenceUpdate,
    user: CurrentUser,
    service: NotificationServiceDep,
) -> NotificationPreferenceRead:
    preference = await service.set_preference(user.id, request.notification_type, request.enabled)
    return NotificationPreferenceRead.model_validate(preference)


@router.post(
    "/{notification_id}/read",
    response_model=NotificationRead,
    summary="Mark notification read",
    responses={404: {"description": "Notification not found"}},
)
async def mark_read(
    notification_id: UUID,
    user: CurrentUser,
    service: NotificationServiceDep,
) -> NotificationRead:
    try:
        notification = await service.mark_read(notification_id, user.id)
    except ValueError as e:
        raise_http_error(e)
    return NotificationRead.model_validate(notification)
