"""Device catalog, device sync and device template endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, status

from src.crm.api.dependencies import (
    AdminUser,
    CurrentUser,
    DeviceServiceDep,
    DeviceTemplateServiceDep,
)
from src.crm.api.dependencies.services import get_device_service
from src.crm.api.v1.crud import build_crud_router
from src.crm.core.exceptions import raise_http_error
from src.crm.schemas.device import (
    BulkSyncResponse,
    DeviceCreate,
    DeviceRead,
    DeviceSyncStatus,
    DeviceTemplateCreate,
    DeviceTemplateRead,
    DeviceTemplateUpdate,
    DeviceUpdate,
)
from src.crm.schemas.pagination import PaginatedResponse
from src.crm.services.device_service import needs_update

# Static paths are registered before the CRUD router so "/devices/catalog"
# is not read as a device id.
catalog_router = APIRouter(prefix="/devices", tags=["devices"])

devices_router = build_crud_router(
    prefix="devices",
    label="Device",
    get_service=get_device_service,
    create_schema=DeviceCreate,
    update_schema=DeviceUpdate,
    read_schema=DeviceRead,
)

templates_router = APIRouter(prefix="/device-templates", tags=["device-templates"])


@catalog_router.get(
    "/catalog",
    response_model=PaginatedResponse[DeviceRead],
    summary="List global catalog devices",
)
async def list_catalog(
    user: CurrentUser,
    service: DeviceServiceDep,
    cursor: Annotated[str | None, Query(description="Cursor for pagination")] = None,
    limit: Annotated[int, Query(ge=1, le=100, description="Max items to return")] = 50,
    search: Annotated[str | None, Query(description="Case-insensitive name search")] = None,
) -> PaginatedResponse[DeviceRead]:
    page = await service.list_catalog(cursor, limit, search)
    return PaginatedResponse[DeviceRead].from_page(page, DeviceRead)


@catalog_router.get(
    "/sync-status",
    response_model=list[DeviceSyncStatus],
    summary="Imported devices with pending catalog updates",
)
async def sync_status(user: CurrentUser, service: DeviceServiceDep) -> list[DeviceSyncStatus]:
    return [
        DeviceSyncStatus(
            device=DeviceRead.model_validate(device),
            source_sync_version=source.sync_version,
            needs_update=needs_update(device, source),
        )
        for device, source in await service.sync_status()
    ]


@catalog_router.post(
    "/sync",
    response_model=BulkSyncResponse,
    summary="Sync all imported devices",
    description="Update every imported device whose catalog source has a newer version.",
)
async def bulk_sync(admin_user: AdminUser, service: DeviceServiceDep) -> BulkSyncResponse:
    return BulkSyncResponse(updated=await service.bulk_sync())


@catalog_router.post(
    "/catalog/{source_id}/import",
    response_model=DeviceRead,
    status_code=status.HTTP_201_CREATED,
    summary="Import a catalog device",
    responses={
        404: {"description": "Catalog device not found"},
        409: {"description": "Device already imported"},
    },
)
async def import_device(
    source_id: UUID,
    user: CurrentUser,
    service: DeviceServiceDep,
) -> DeviceRead:
    try:
        device = await service.import_device(source_id)
    except ValueError as e:
        raise_http_error(e)
    return DeviceRead.model_validate(device)


@catalog_router.post(
    "/{device_id}/sync",
    response_model=DeviceRead,
    summary="Sync one imported device",
    responses={
        400: {"description": "Device is not linked to a catalog device"},
        404: {"description": "Device not found"},
    },
)
async def sync_device(
    device_id: UUID,
    user: CurrentUser,
    service: DeviceServiceDep,
) -> DeviceRead:
    try:
        device = await service.sync_device(device_id)
    except ValueError as e:
        raise_http_error(e)
    return DeviceRead.model_validate(device)


@templates_router.get(
    "",
    response_model=PaginatedResponse[DeviceTemplateRead],
    summary="List device templates",
    description="Tenant templates plus the read-only global templates.",
)
async def list_templates(
    user: CurrentUser,
    service: DeviceTemplateServiceDep,
    cursor: Annotated[str | None, Query(description="Cursor for pagination")] = None,
    limit: Annotated[int, Query(ge=1, le=100, description="Max items to return")] = 50,
    search: Annotated[str | None, Query(description="Case-insensitive name search")] = None,
) -> PaginatedResponse[DeviceTemplateRead]:
    page = await service.list_page(cursor, limit, search)
    return PaginatedResponse[DeviceTemplateRead].from_page(page, DeviceTemplateRead)


@templates_router.get(
    "/{template_id}",
    response_model=DeviceTemplateRead,
    summary="Get device template",
    responses={404: {"description": "Template not found"}},
)
async def get_template(
    template_id: UUID,
    user: CurrentUser,
    service: DeviceTemplateServiceDep,
) -> DeviceTemplateRead:
    try:
        return DeviceTemplateRead.model_validate(await service.get(template_id))
    except ValueError as e:
        raise_http_error(e)


@templates_router.post(
    "",
    response_model=DeviceTemplateRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create device template",
)
async def create_template(
    request: DeviceTemplateCreate,
    user: CurrentUser,
    service: DeviceTemplateServiceDep,
) -> DeviceTemplateRead:
    template = await service.create(request, user.id)
    return DeviceTemplateRead.model_validate(template)


@templates_router.patch(
    "/{template_id}",
    response_model=DeviceTemplateRead,
    summary="Update device template",
    responses={
        403: {"description": "Global templates are read-only"},
        404: {"description": "Template not found"},
    },
)
async def update_template(
    template_id: UUID,
    request: DeviceTemplateUpdate,
    user: CurrentUser,
    service: DeviceTemplateServiceDep,
) -> DeviceTemplateRead:
    try:
        template = await service.update(template_id, request)
    except ValueError as e:
        raise_http_error(e)
    return DeviceTemplateRead.model_validate(template)


@templates_router.delete(
    "/{template_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Deactivate device template",
    responses={
        403: {"description": "Global templates are read-only"},
        404: {"description": "Template not found"},
    },
)
async def delete_template(
    template_id: UUID,
    user: CurrentUser,
    service: DeviceTemplateServiceDep,
) -> None:
    try:
        await service.delete(template_id)
    except ValueError as e:
        raise_http_error(e)


@templates_router.post(
    "/{template_id}/import",
    response_model=DeviceTemplateRead,
    status_code=status.HTTP_201_CREATED,
    summary="Import a global template",
    description="Creates a tenant copy; a clashing name gets the suffix ' (Imported)'.",
    responses={404: {"description": "Template not found"}},
)
async def import_template(
    template_id: UUID,
    user: CurrentUser,
    service: DeviceTemplateServiceDep,
) -> DeviceTemplateRead:
    try:
        template = await service.import_template(template_id, user.id)
    except ValueError as e:
        raise_http_error(e)
    return DeviceTemplateRead.model_validate(template)
