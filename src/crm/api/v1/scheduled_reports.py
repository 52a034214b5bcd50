"""Scheduled report endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, status

from src.crm.api.dependencies import (
    AdminUser,
    CurrentUser,
    DBSession,
    ScheduledReportServiceDep,
)
from src.crm.core.exceptions import raise_http_error
from src.crm.schemas.pagination import PaginatedResponse
from src.crm.schemas.report import (
    DueRunResponse,
    ScheduledReportCreate,
    ScheduledReportRead,
    ScheduledReportRunResult,
    ScheduledReportUpdate,
)
from src.crm.services import trigger_due_run

router = APIRouter(prefix="/scheduled-reports", tags=["scheduled-reports"])


@router.get(
    "",
    response_model=PaginatedResponse[ScheduledReportRead],
    summary="List scheduled reports",
)
async def list_scheduled_reports(
    user: CurrentUser,
    service: ScheduledReportServiceDep,
    cursor: Annotated[str | None, Query(description="Cursor for pagination")] = None,
    limit: Annotated[int, Query(ge=1, le=100, description="Max items to return")] = 50,
) -> PaginatedResponse[ScheduledReportRead]:
    page = await service.list_page(cursor, limit)
    return PaginatedResponse[ScheduledReportRead].from_page(page, ScheduledReportRead)


@router.post(
    "/run-due",
    response_model=DueRunResponse,
    summary="Run due scheduled reports",
    description=(
        "Start a pass over every due scheduled report on the worker. Runs "
        "in-process when the worker cannot be reached. Admin role required."
    ),
)
async def run_due(admin_user: AdminUser, session: DBSession) -> DueRunResponse:
    return DueRunResponse.model_validate(await trigger_due_run(session))


@router.get(
    "/{scheduled_id}",
    response_model=ScheduledReportRead,
    summary="Get scheduled report",
    responses={404: {"description": "Scheduled report not found"}},
)
async def get_scheduled_report(
    scheduled_id: UUID,
    user: CurrentUser,
    service: ScheduledReportServiceDep,
) -> ScheduledReportRead:
    try:
        return ScheduledReportRead.model_validate(await service.get(scheduled_id))
    except ValueError as e:
        raise_http_error(e)


@router.post(
    "",
    response_model=ScheduledReportRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create scheduled report",
    responses={404: {"description": "Report not found"}},
)
async def create_scheduled_report(
    request: ScheduledReportCreate,
    user: CurrentUser,
    service: ScheduledReportServiceDep,
) -> ScheduledReportRead:
    try:
        scheduled = await service.create(request, user.id)
    except ValueError as e:
        raise_http_error(e)
    return ScheduledReportRead.model_validate(scheduled)


@router.patch(
    "/{scheduled_id}",
    response_model=ScheduledReportRead,
    summary="Update scheduled report",
    responses={404: {"description": "Scheduled report not found"}},
)
async def update_scheduled_report(
    scheduled_id: UUID,
    request: ScheduledReportUpdate,
    user: CurrentUser,
    service: ScheduledReportServiceDep,
) -> ScheduledReportRead:
    try:
        scheduled = await service.update(scheduled_id, request)
    except ValueError as e:
        raise_http_error(e)
    return ScheduledReportRead.model_validate(scheduled)


@router.delete(
    "/{scheduled_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete scheduled report",
    responses={404: {"description": "Scheduled report not found"}},
)
async def delete_scheduled_report(
    scheduled_id: UUID,
    user: CurrentUser,
    service: ScheduledReportServiceDep,
) -> None:
    try:
        await service.delete(scheduled_id)
    except ValueError as e:
        raise_http_error(e)


@router.post(
    "/{scheduled_id}/toggle",
    response_model=ScheduledReportRead,
    summary="Toggle scheduled report",
    description="Flip is_active.",
    responses={404: {"description": "Scheduled report not found"}},
)
async def toggle_scheduled_report(
    scheduled_id: UUID,
    user: CurrentUser,
    service: ScheduledReportServiceDep,
) -> ScheduledReportRead:
    try:
        scheduled = await service.toggle(scheduled_id)
    except ValueError as e:
        raise_http_error(e)
    return ScheduledReportRead.model_validate(scheduled)


@router.post(
    "/{scheduled_id}/run-now",
    response_model=ScheduledReportRunResult,
    summary="Run scheduled report now",
    description="Generate the report, email every recipient and advance next_run_at.",
    responses={404: {"description": "Scheduled report or report not found"}},
)
async def run_scheduled_report_now(
    scheduled_id: UUID,
    user: CurrentUser,
    service: ScheduledReportServiceDep,
) -> ScheduledReportRunResult:
    try:
        result = await service.run_now(scheduled_id)
    except ValueError as e:
        raise_http_error(e)
    return ScheduledReportRunResult(**result)
