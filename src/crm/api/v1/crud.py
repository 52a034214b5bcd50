"""Router factory for the plain tenant-scoped entities.

Every router built here exposes list, get, create, partial update and soft
delete. All routes require ``X-Tenant-ID`` and an active membership.
"""

from collections.abc import Callable
from typing import Annotated, Any
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel

from src.crm.api.dependencies import CurrentUser
from src.crm.core.exceptions import raise_http_error
from src.crm.schemas.pagination import PaginatedResponse
from src.crm.services import EntityService


def build_crud_router(
    *,
    prefix: str,
    label: str,
    get_service: Callable[..., EntityService[Any]],
    create_schema: type[BaseModel],
    update_schema: type[BaseModel],
    read_schema: type[BaseModel],
) -> APIRouter:
    """Build the CRUD routes for one entity.

    Args:
        prefix: URL prefix, also used as the OpenAPI tag
        label: Singular display name used in summaries
        get_service: Dependency returning the entity's service
        create_schema: Request body for POST
        update_schema: Request body for PATCH
        read_schema: Response model
    """
    router = APIRouter(prefix=f"/{prefix}", tags=[prefix])
    Service = Annotated[EntityService[Any], Depends(get_service)]
    plural = prefix.replace("-", " ")

    @router.get(
        "",
        response_model=PaginatedResponse[read_schema],  # type: ignore[valid-type]
        summary=f"List {plural}",
        description=f"List {plural} in the current tenant, newest first.",
    )
    async def list_entities(
        user: CurrentUser,
        service: Service,
        cursor: Annotated[str | None, Query(description="Cursor for pagination")] = None,
        limit: Annotated[int, Query(ge=1, le=100, description="Max items to return")] = 50,
        search: Annotated[str | None, Query(description="Case-insensitive name search")] = None,
        status_filter: Annotated[str | None, Query(alias="status")] = None,
    ) -> PaginatedResponse[Any]:
        filters: dict[str, Any] = {}
        if status_filter is not None and "status" in service.repo.model.model_fields:
            filters["status"] = status_filter
        page = await service.list_page(cursor, limit, search, **filters)
        return PaginatedResponse[read_schema].from_page(page, read_schema)  # type: ignore[valid-type]

    @router.get(
        "/{entity_id}",
        response_model=read_schema,
        summary=f"Get {label.lower()}",
        responses={404: {"description": f"{label} not found"}},
    )
    async def get_entity(entity_id: UUID, user: CurrentUser, service: Service) -> Any:
        try:
            return read_schema.model_validate(await service.get(entity_id))
        except ValueError as e:
            raise_http_error(e)

    @router.post(
        "",
        response_model=read_schema,
        status_code=status.HTTP_201_CREATED,
        summary=f"Create {label.lower()}",
    )
    async def create_entity(
        request: create_schema,  # type: ignore[valid-type]
        user: CurrentUser,
        service: Service,
    ) -> Any:
        try:
            entity = await service.create(request, user.id)
        except ValueError as e:
            raise_http_error(e)
        return read_schema.model_validate(entity)

    @router.patch(
        "/{entity_id}",
        response_model=read_schema,
        summary=f"Update {label.lower()}",
        description="Partial update: only fields present in the body are written.",
        responses={404: {"description": f"{label} not found"}},
    )
    async def update_entity(
        entity_id: UUID,
        request: update_schema,  # type: ignore[valid-type]
        user: CurrentUser,
        service: Service,
    ) -> Any:
        try:
            entity = await service.update(entity_id, request, user.id)
        except ValueError as e:
            raise_http_error(e)
        return read_schema.model_validate(entity)

    @router.delete(
        "/{entity_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        summary=f"Delete {label.lower()}",
        description="Soft delete: the row is hidden from every later read.",
        responses={404: {"description": f"{label} not found"}},
    )
    async def delete_entity(entity_id: UUID, user: CurrentUser, service: Service) -> None:
        try:
            await service.delete(entity_id, user.id)
        except ValueError as e:
            raise_http_error(e)

    return router
