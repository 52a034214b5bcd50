"""Test helper functions for common data creation patterns."""

from datetime import UTC, datetime, timedelta
from typing import Any

from jose import jwt
from sqlalchemy.ext.asyncio import AsyncSession

from src.crm.core.config import get_settings
from src.crm.models.enums import MembershipRole
from src.crm.models.public import Profile, Tenant, UserTenantMembership
from tests.factories import ProfileFactory, UserTenantMembershipFactory


def make_access_token(
    user_id: Any,
    email: str,
    *,
    expires_in: timedelta = timedelta(hours=1),
    audience: str | None = "authenticated",
    **extra_claims: Any,
) -> str:
    """Sign a token the way the auth provider does."""
    settings = get_settings()
    claims: dict[str, Any] = {
        "sub": str(user_id),
        "email": email,
        "exp": datetime.now(UTC) + expires_in,
        **extra_claims,
    }
    if audience is not None:
        claims["aud"] = audience
    return jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def auth_headers(profile: Profile, tenant: Tenant | None = None) -> dict[str, str]:
    """Authorization (and X-Tenant-ID) headers for a profile."""
    headers = {"Authorization": f"Bearer {make_access_token(profile.id, profile.email)}"}
    if tenant is not None:
        headers["X-Tenant-ID"] = str(tenant.id)
    return headers


async def create_user_with_membership(
    session: AsyncSession,
    tenant: Tenant,
    role: MembershipRole = MembershipRole.ADMIN,
    **profile_kwargs: Any,
) -> tuple[Profile, UserTenantMembership]:
    """Create a profile and its membership in a tenant.

    Args:
        session: Database session
        tenant: Tenant to create membership in
        role: Role for the membership (default: ADMIN)
        **profile_kwargs: Additional args passed to ProfileFactory

    Returns:
        Tuple of (profile, membership)
    """
    profile = ProfileFactory.build(**profile_kwargs)
    session.add(profile)
    await session.flush()

    membership = UserTenantMembershipFactory.build(
        user_id=profile.id,
        tenant_id=tenant.id,
        role=role.value,
    )
    session.add(membership)
    await session.commit()
    return profile, membership
