"""Profile and recovery email endpoints (no tenant context)."""

from fastapi import APIRouter, Request

from src.crm.api.dependencies import AuthenticatedUser, ProfileServiceDep
from src.crm.core.exceptions import raise_http_error
from src.crm.core.rate_limit import limiter, public_rate_limit
from src.crm.schemas.profile import (
    ProfileRead,
    ProfileUpdate,
    RecoveryEmailRequest,
    RecoveryEmailRequestResponse,
    RecoveryEmailVerify,
    RecoveryEmailVerifyResponse,
)

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=ProfileRead, summary="Get my profile")
async def get_profile(user: AuthenticatedUser) -> ProfileRead:
    return ProfileRead.model_validate(user)


@router.patch("", response_model=ProfileRead, summary="Update my profile")
async def update_profile(
    profile_data: ProfileUpdate,
    user: AuthenticatedUser,
    service: ProfileServiceDep,
) -> ProfileRead:
    return ProfileRead.model_validate(await service.update_profile(user, profile_data))


@router.post(
    "/recovery-email",
    response_model=RecoveryEmailRequestResponse,
    summary="Set recovery email",
    description="Store an unverified recovery email and send a verification link.",
    responses={
        400: {"description": "Invalid email address"},
        409: {"description": "Email already used as a recovery email by another account"},
    },
)
async def request_recovery_email(
    recovery_data: RecoveryEmailRequest,
    user: AuthenticatedUser,
    service: ProfileServiceDep,
) -> RecoveryEmailRequestResponse:
    try:
        expires_at = await service.request_recovery_email(user, recovery_data.recovery_email)
    except ValueError as e:
        raise_http_error(e)
    return RecoveryEmailRequestResponse(expires_at=expires_at)


@router.post(
    "/recovery-email/verify",
    response_model=RecoveryEmailVerifyResponse,
    summary="Verify recovery email",
    description="Public: the emailed token is the credential.",
    responses={
        400: {"description": "Verification token has expired"},
        404: {"description": "Invalid or expired verification token"},
    },
)
@limiter.limit(public_rate_limit)
async def verify_recovery_email(
    request: Request,
    verify_data: RecoveryEmailVerify,
    service: ProfileServiceDep,
) -> RecoveryEmailVerifyResponse:
    try:
        recovery_email = await service.verify_recovery_email(verify_data.token)
    except ValueError as e:
        raise_http_error(e)
    return RecoveryEmailVerifyResponse(recovery_email=recovery_email)
