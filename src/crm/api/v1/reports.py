"""Report endpoints: saved reports, data generation and HTML export."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, status

from src.crm.api.dependencies import CurrentUser, ReportServiceDep
from src.crm.core.exceptions import raise_http_error
from src.crm.schemas.pagination import PaginatedResponse
from src.crm.schemas.report import (
    ReportCreate,
    ReportDataResponse,
    ReportExportResponse,
    ReportGenerateRequest,
    ReportRead,
    ReportUpdate,
)

router = APIRouter(prefix="/reports", tags=["reports"])


@router.post(
    "/generate",
    response_model=ReportDataResponse,
    summary="Generate report data",
    description="Run an ad-hoc query against one data source.",
    responses={400: {"description": "Unsupported data source or invalid filter value"}},
)
async def generate_report(
    request: ReportGenerateRequest,
    user: CurrentUser,
    service: ReportServiceDep,
) -> ReportDataResponse:
    try:
        result = await service.generate(request.data_source, request.query_config)
    except ValueError as e:
        raise_http_error(e)
    return ReportDataResponse(**result)


@router.get(
    "",
    response_model=PaginatedResponse[ReportRead],
    summary="List reports",
    description="Reports created by the user plus reports shared with the tenant.",
)
async def list_reports(
    user: CurrentUser,
    service: ReportServiceDep,
    cursor: Annotated[str | None, Query(description="Cursor for pagination")] = None,
    limit: Annotated[int, Query(ge=1, le=100, description="Max items to return")] = 50,
) -> PaginatedResponse[ReportRead]:
    page = await service.list_page(user.id, cursor, limit)
    return PaginatedResponse[ReportRead].from_page(page, ReportRead)


@router.get(
    "/{report_id}",
    response_model=ReportRead,
    summary="Get report",
    responses={404: {"description": "Report not found"}},
)
async def get_report(report_id: UUID, user: CurrentUser, service: ReportServiceDep) -> ReportRead:
    try:
        return ReportRead.model_validate(await service.get(report_id, user.id))
    except ValueError as e:
        raise_http_error(e)


@router.post(
    "",
    response_model=ReportRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create report",
)
async def create_report(
    request: ReportCreate,
    user: CurrentUser,
    service: ReportServiceDep,
) -> ReportRead:
    report = await service.create(request, user.id)
    return ReportRead.model_validate(report)


@router.patch(
    "/{report_id}",
    response_model=ReportRead,
    summary="Update report",
    responses={
        403: {"description": "Only the creator can modify this report"},
        404: {"description": "Report not found"},
    },
)
async def update_report(
    report_id: UUID,
    request: ReportUpdate,
    user: CurrentUser,
    service: ReportServiceDep,
) -> ReportRead:
    try:
        report = await service.update(report_id, request, user.id)
    except ValueError as e:
        raise_http_error(e)
    return ReportRead.model_validate(report)


@router.delete(
    "/{report_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete report",
    responses={
        403: {"description": "Only the creator can modify this report"},
        404: {"description": "Report not found"},
    },
)
async def delete_report(report_id: UUID, user: CurrentUser, service: ReportServiceDep) -> None:
    try:
        await service.delete(report_id, user.id)
    except ValueError as e:
        raise_http_error(e)


@router.post(
    "/{report_id}/generate",
    response_model=ReportDataResponse,
    summary="Generate saved report data",
    responses={404: {"description": "Report not found"}},
)
async def generate_saved_report(
    report_id: UUID,
    user: CurrentUser,
    service: ReportServiceDep,
) -> ReportDataResponse:
    try:
        result = await service.generate_for_report(report_id, user.id)
    except ValueError as e:
        raise_http_error(e)
    return ReportDataResponse(**result)


@router.post(
    "/{report_id}/export",
    response_model=ReportExportResponse,
    summary="Export report as HTML",
    description="Render the report data as a standalone HTML document.",
    responses={404: {"description": "Report not found"}},
)
async def export_report(
    report_id: UUID,
    user: CurrentUser,
    service: ReportServiceDep,
) -> ReportExportResponse:
    try:
        result = await service.export(report_id, user.id)
    except ValueError as e:
        raise_http_error(e)
    return ReportExportResponse(**result)
