"""Invitation and recovery-token cleanup activities."""

from temporalio import activity

from src.crm.core.db import get_session
from src.crm.repositories import ProfileRepository, TenantInvitationRepository


@activity.defn
async def cleanup_expired_invitations(retention_days: int) -> int:
    """
    Delete invitations that expired, or were cancelled or accepted, more than
    retention_days ago.

    Idempotent: a second run finds no matching rows.

    Args:
        retention_days: Number of days to keep finished invitations

    Returns:
        Number of invitations deleted
    """
    activity.logger.info(f"Cleaning up invitations older than {retention_days} days")

    async with get_session() as session:
        count = await TenantInvitationRepository(session).cleanup_expired(retention_days)
        await session.commit()

    activity.logger.info(f"Deleted {count} invitations")
    return count


@activity.defn
async def cleanup_recovery_email_tokens() -> int:
    """
    Clear recovery-email verification tokens past their expiry.

    The recovery email itself stays, unverified; the user can request a new link.

    Returns:
        Number of profiles updated
    """
    activity.logger.info("Clearing expired recovery email tokens")

    async with get_session() as session:
        count = await ProfileRepository(session).clear_expired_recovery_tokens()
        await session.commit()

    activity.logger.info(f"Cleared {count} expired recovery email tokens")
    return count
