"""Tenant invitation API endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, Request, status

from src.crm.api.dependencies import (
    AdminUser,
    AuthenticatedUser,
    InvitationServiceDep,
    InvitationServicePublicDep,
)
from src.crm.core.exceptions import raise_http_error
from src.crm.core.rate_limit import limiter, public_rate_limit
from src.crm.schemas.invitation import (
    InvitationAccept,
    InvitationAcceptResponse,
    InvitationCreate,
    InvitationInfoResponse,
    InvitationLink,
    InvitationRead,
)
from src.crm.schemas.pagination import PaginatedResponse

router = APIRouter(prefix="/invitations", tags=["invitations"])


# =============================================================================
# Admin Endpoints (require X-Tenant-ID header + admin role)
# =============================================================================


@router.post(
    "",
    response_model=InvitationRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create invitation",
    description="Create and email an invitation to join the tenant. Admin role required.",
    responses={409: {"description": "User is already a member of this tenant"}},
)
async def create_invitation(
    invitation_data: InvitationCreate,
    admin_user: AdminUser,
    service: InvitationServiceDep,
) -> InvitationRead:
    try:
        invitation, _ = await service.create_invitation(
            invitation_data.email, admin_user, invitation_data.role
        )
    except ValueError as e:
        raise_http_error(e)
    return InvitationRead.model_validate(invitation)


@router.get(
    "",
    response_model=PaginatedResponse[InvitationRead],
    summary="List pending invitations",
    description="Pending invitations of the tenant. Admin role required.",
)
async def list_invitations(
    admin_user: AdminUser,
    service: InvitationServiceDep,
    cursor: Annotated[str | None, Query(description="Cursor for pagination")] = None,
    limit: Annotated[int, Query(ge=1, le=100, description="Max items to return")] = 50,
) -> PaginatedResponse[InvitationRead]:
    page = await service.list_pending(cursor, limit)
    return PaginatedResponse[InvitationRead].from_page(page, InvitationRead)


@router.delete(
    "/{invitation_id}",
    response_model=InvitationRead,
    summary="Cancel invitation",
    description="Cancel a pending invitation. Admin role required.",
    responses={
        400: {"description": "Invitation is not pending"},
        404: {"description": "Invitation not found"},
    },
)
async def cancel_invitation(
    invitation_id: UUID,
    admin_user: AdminUser,
    service: InvitationServiceDep,
) -> InvitationRead:
    try:
        invitation = await service.cancel(invitation_id)
    except ValueError as e:
        raise_http_error(e)
    return InvitationRead.model_validate(invitation)


# =============================================================================
# Token Endpoints (no X-Tenant-ID header)
# =============================================================================


@router.get(
    "/info",
    response_model=InvitationInfoResponse,
    summary="Get invitation info",
    description="Public details of an invitation, shown before accepting.",
    responses={404: {"description": "Invalid or expired invitation"}},
)
@limiter.limit(public_rate_limit)
async def get_invitation_info(
    request: Request,
    service: InvitationServicePublicDep,
    token: Annotated[str, Query(min_length=1)],
) -> InvitationInfoResponse:
    try:
        info = await service.get_info(token)
    except ValueError as e:
        raise_http_error(e)
    return InvitationInfoResponse(**info)


@router.post(
    "/accept",
    response_model=InvitationAcceptResponse,
    summary="Accept invitation",
    description=(
        "Join the invitation's tenant as the signed-in user. An invitation sent "
        "to another address links that address to the account."
    ),
    responses={
        400: {"description": "Invited email is linked to another account"},
        404: {"description": "Invalid or expired invitation"},
    },
)
async def accept_invitation(
    accept_data: InvitationAccept,
    user: AuthenticatedUser,
    service: InvitationServicePublicDep,
) -> InvitationAcceptResponse:
    try:
        result = await service.accept(
            accept_data.token,
            user,
            first_name=accept_data.first_name,
            last_name=accept_data.last_name,
        )
    except ValueError as e:
        raise_http_error(e)
    return InvitationAcceptResponse(**result)


@router.post(
    "/link",
    response_model=InvitationAcceptResponse,
    summary="Link invitation to account",
    description="Accept an invitation with an existing account, leaving the profile unchanged.",
    responses={
        400: {"description": "Invited email is linked to another account"},
        404: {"description": "Invalid or expired invitation"},
    },
)
async def link_invitation(
    link_data: InvitationLink,
    user: AuthenticatedUser,
    service: InvitationServicePublicDep,
) -> InvitationAcceptResponse:
    try:
        result = await service.link(link_data.token, user)
    except ValueError as e:
        raise_http_error(e)
    return InvitationAcceptResponse(**result)
