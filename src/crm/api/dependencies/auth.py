"""Authentication and authorization dependencies.

Access tokens are issued by the hosted auth provider; this API only verifies
them. The token subject is the user id, and a local Profile is created the
first time a subject is seen.
"""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Header, HTTPException, status

from src.crm.api.dependencies.db import DBSession
from src.crm.api.dependencies.tenant import ValidatedTenant
from src.crm.core.logging import bind_user_context
from src.crm.core.security import decode_token
from src.crm.models import Profile, UserTenantMembership
from src.crm.repositories import MembershipRepository, ProfileRepository, UserEmailRepository
from src.crm.services.profile_service import ProfileService


def _validate_access_token(authorization: str | None) -> tuple[UUID, str]:
    """Validate the bearer token and return (user_id, email)."""
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing or invalid authorization header",
        )

    payload = decode_token(authorization[7:])
    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    user_id = payload.get("sub")
    email = payload.get("email")
    if not user_id or not email:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload",
        )

    try:
        return UUID(user_id), email
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid user_id in token",
        ) from e


async def get_authenticated_user(
    session: DBSession,
    authorization: Annotated[str | None, Header()] = None,
) -> Profile:
    """Validate the access token and return the user's profile (no tenant required).

    Used for tenant-agnostic endpoints like listing the user's tenants.
    """
    user_id, email = _validate_access_token(authorization)
    profile_service = ProfileService(
        ProfileRepository(session), UserEmailRepository(session), session
    )
    profile = await profile_service.get_or_create(user_id, email)

    if not profile.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found or inactive",
        )

    bind_user_context(profile.id, email=profile.email)
    return profile


AuthenticatedUser = Annotated[Profile, Depends(get_authenticated_user)]


async def get_current_membership(
    user: AuthenticatedUser,
    tenant: ValidatedTenant,
    session: DBSession,
) -> UserTenantMembership:
    """Require an active membership of the user in the X-Tenant-ID tenant."""
    membership = await MembershipRepository(session).get_active_membership(user.id, tenant.id)
    if membership is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User does not have access to this tenant",
        )

    bind_user_context(user.id, tenant.id, user.email)
    return membership


CurrentMembership = Annotated[UserTenantMembership, Depends(get_current_membership)]


async def get_current_user(user: AuthenticatedUser, membership: CurrentMembership) -> Profile:
    """Authenticated user who is an active member of the request tenant."""
    return user


CurrentUser = Annotated[Profile, Depends(get_current_user)]


async def require_admin_role(user: CurrentUser, membership: CurrentMembership) -> Profile:
    """Require the owner or admin role in the request tenant."""
    if not membership.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin role required for this operation",
        )
    return user


AdminUser = Annotated[Profile, Depends(require_admin_role)]
