"""Repository for TenantInvitation entity."""

from datetime import timedelta
from uuid import UUID

from sqlalchemy import and_, delete, func, or_, update
from sqlmodel import select

from src.crm.models.base import utc_now
from src.crm.models.enums import InvitationStatus
from src.crm.models.public import TenantInvitation
from src.crm.repositories.base import BaseRepository


class TenantInvitationRepository(BaseRepository[TenantInvitation]):
    model = TenantInvitation

    async def get_valid_by_hash(self, token_hash: str) -> TenantInvitation | None:
        """Pending, unaccepted, non-expired invitation for a token hash."""
        result = await self.session.execute(
            select(TenantInvitation).where(
                TenantInvitation.token_hash == token_hash,
                TenantInvitation.status == InvitationStatus.PENDING.value,
                TenantInvitation.accepted_at.is_(None),  # type: ignore[union-attr]
                TenantInvitation.expires_at > utc_now(),
            )
        )
        return result.scalar_one_or_none()

    async def get_for_tenant(self, invitation_id: UUID, tenant_id: UUID) -> TenantInvitation | None:
        result = await self.session.execute(
            select(TenantInvitation).where(
                TenantInvitation.id == invitation_id,
                TenantInvitation.tenant_id == tenant_id,
            )
        )
        return result.scalar_one_or_none()

    async def get_pending_by_tenant_paginated(
        self, tenant_id: UUID, cursor: str | None, limit: int
    ) -> tuple[list[TenantInvitation], str | None, bool]:
        query = select(TenantInvitation).where(
            TenantInvitation.tenant_id == tenant_id,
            TenantInvitation.status == InvitationStatus.PENDING.value,
        )
        return await self.paginate(query, cursor, limit, TenantInvitation.created_at)

    async def cancel_pending_for_email(self, email: str, tenant_id: UUID) -> None:
        """Cancel earlier pending invitations so only the newest token works."""
        await self.session.execute(
            update(TenantInvitation)
            .where(func.lower(TenantInvitation.email) == email.lower())
            .where(TenantInvitation.tenant_id == tenant_id)  # type: ignore[arg-type]
            .where(TenantInvitation.status == InvitationStatus.PENDING.value)  # type: ignore[arg-type]
            .values(status=InvitationStatus.CANCELLED.value)
        )

    def mark_accepted(self, invitation: TenantInvitation, user_id: UUID) -> TenantInvitation:
        invitation.status = InvitationStatus.ACCEPTED.value
        invitation.accepted_at = utc_now()
        invitation.accepted_by_user_id = user_id
        self.session.add(invitation)
        return invitation

    async def cleanup_expired(self, retention_days: int) -> int:
        """Delete invitations expired, cancelled or accepted more than retention_days ago.

        Returns:
            Number of invitations deleted (caller commits)
        """
        cutoff = utc_now() - timedelta(days=retention_days)
        stmt = delete(TenantInvitation).where(
            or_(
                TenantInvitation.expires_at < cutoff,  # type: ignore[arg-type]
                and_(
                    TenantInvitation.status.in_(  # type: ignore[attr-defined]
                        [InvitationStatus.CANCELLED.value, InvitationStatus.ACCEPTED.value]
                    ),
                    TenantInvitation.created_at < cutoff,  # type: ignore[arg-type]
                ),
            )
        )
        result = await self.session.execute(stmt)
        return result.rowcount or 0  # type: ignore[attr-defined]
