"""Tenant invitations: create, cancel, accept and link to an existing account."""

import asyncio
from datetime import timedelta
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.crm.core.config import get_settings
from src.crm.core.exceptions import ConflictError, NotFoundError
from src.crm.core.logging import get_logger
from src.crm.core.notifications import send_invitation_email
from src.crm.core.security import generate_token, hash_token
from src.crm.models.base import utc_now
from src.crm.models.enums import InvitationStatus, MembershipRole, NotificationType
from src.crm.models.public import Profile, TenantInvitation, UserEmail
from src.crm.repositories import (
    MembershipRepository,
    NotificationPreferenceRepository,
    NotificationRepository,
    TenantInvitationRepository,
    TenantRepository,
    UserEmailRepository,
)
from src.crm.services.notification_service import NotificationService

logger = get_logger(__name__)

INVALID_INVITATION = "Invalid or expired invitation"


class InvitationService:
    """Invitation operations.

    Admin operations need ``tenant_id``; accept, link and info work from the
    token alone.
    """

    def __init__(
        self,
        invitation_repo: TenantInvitationRepository,
        email_repo: UserEmailRepository,
        membership_repo: MembershipRepository,
        tenant_repo: TenantRepository,
        session: AsyncSession,
        tenant_id: UUID | None = None,
    ):
        self.invitation_repo = invitation_repo
        self.email_repo = email_repo
        self.membership_repo = membership_repo
        self.tenant_repo = tenant_repo
        self.session = session
        self.tenant_id = tenant_id

    def _require_tenant(self) -> UUID:
        if self.tenant_id is None:
            raise ValueError("Tenant context required")
        return self.tenant_id

    async def create_invitation(
        self,
        email: str,
        inviter: Profile,
        role: str = MembershipRole.MEMBER.value,
    ) -> tuple[TenantInvitation, str]:
        """Create an invitation and email the link.

        An earlier pending invitation for the same address is cancelled.

        Returns:
            (invitation, plaintext_token)
        """
        tenant_id = self._require_tenant()
        settings = get_settings()
        email = email.strip().lower()

        try:
            known_email = await self.email_repo.get_by_email(email)
            if known_email is not None and await self.membership_repo.is_active_member(
                known_email.user_id, tenant_id
            ):
                raise ConflictError("User is already a member of this tenant")

            await self.invitation_repo.cancel_pending_for_email(email, tenant_id)

            token = generate_token()
            invitation = TenantInvitation(
                tenant_id=tenant_id,
                email=email,
                role=role,
                token_hash=hash_token(token),
                invited_by=inviter.id,
                expires_at=utc_now() + timedelta(days=settings.invite_expire_days),
            )
            self.invitation_repo.add(invitation)
            await self.session.commit()
            await self.session.refresh(invitation)
        except ValueError:
            await self.session.rollback()
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to create invitation", error=str(e))
            raise

        tenant = await self.tenant_repo.get_by_id(tenant_id)
        await asyncio.to_thread(
            send_invitation_email,
            to=email,
            token=token,
            tenant_name=tenant.name if tenant else "your team",
            inviter_name=inviter.display_name,
            role=role,
        )
        logger.info("Invitation created", invitation_id=str(invitation.id), role=role)
        return invitation, token

    async def list_pending(
        self, cursor: str | None, limit: int
    ) -> tuple[list[TenantInvitation], str | None, bool]:
        return await self.invitation_repo.get_pending_by_tenant_paginated(
            self._require_tenant(), cursor, limit
        )

    async def cancel(self, invitation_id: UUID) -> TenantInvitation:
        invitation = await self.invitation_repo.get_for_tenant(
            invitation_id, self._require_tenant()
        )
        if invitation is None:
            raise NotFoundError("Invitation not found")
        if invitation.status != InvitationStatus.PENDING.value:
            raise ValueError(f"Cannot cancel invitation with status: {invitation.status}")

        try:
            invitation.status = InvitationStatus.CANCELLED.value
            self.session.add(invitation)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Invitation cancelled", invitation_id=str(invitation_id))
        return invitation

    async def get_info(self, token: str) -> dict[str, Any]:
        """Public details shown before accepting."""
        invitation = await self.invitation_repo.get_valid_by_hash(hash_token(token))
        if invitation is None:
            raise NotFoundError(INVALID_INVITATION)
        tenant = await self.tenant_repo.get_by_id(invitation.tenant_id)
        if tenant is None or tenant.is_deleted:
            raise NotFoundError(INVALID_INVITATION)
        return {
            "tenant_name": tenant.name,
            "email": invitation.email,
            "role": invitation.role,
            "expires_at": invitation.expires_at,
        }

    async def accept(
        self,
        token: str,
        user: Profile,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> dict[str, Any]:
        """Accept an invitation as the signed-in user.

        An invitation sent to another address than the user's own links that
        address to the user as a verified secondary email.

        Raises:
            NotFoundError: Token unknown, used, cancelled or expired.
            ValueError: The invited address belongs to another account.
        """
        invitation = await self.invitation_repo.get_valid_by_hash(hash_token(token))
        if invitation is None:
            raise NotFoundError(INVALID_INVITATION)
        tenant = await self.tenant_repo.get_by_id(invitation.tenant_id)
        if tenant is None or tenant.is_deleted:
            raise NotFoundError(INVALID_INVITATION)

        try:
            secondary_email_added = await self._link_invited_email(invitation, user)

            if first_name:
                user.first_name = first_name
            if last_name:
                user.last_name = last_name
            if first_name or last_name:
                user.updated_at = utc_now()
                self.session.add(user)

            await self._ensure_primary_email(user)

            already_member = False
            membership = await self.membership_repo.get_membership(user.id, invitation.tenant_id)
            if membership is not None and membership.is_active:
                already_member = True
            elif membership is not None:
                membership.is_active = True
                membership.role = invitation.role
                membership.updated_at = utc_now()
                self.session.add(membership)
            else:
                self.membership_repo.create_membership(
                    user.id, invitation.tenant_id, invitation.role
                )

            self.invitation_repo.mark_accepted(invitation, user.id)
            await self.session.commit()
        except ValueError:
            await self.session.rollback()
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to accept invitation", error=str(e))
            raise

        logger.info(
            "Invitation accepted",
            invitation_id=str(invitation.id),
            user_id=str(user.id),
            already_member=already_member,
        )
        if not already_member:
            await self._notify_inviter(invitation, user)

        return {
            "tenant_id": tenant.id,
            "tenant_name": tenant.name,
            "role": invitation.role,
            "already_member": already_member,
            "secondary_email_added": secondary_email_added,
        }

    async def link(self, token: str, user: Profile) -> dict[str, Any]:
        """Link an invitation to an existing account without touching the profile."""
        return await self.accept(token, user)

    async def _link_invited_email(self, invitation: TenantInvitation, user: Profile) -> bool:
        if invitation.email.lower() == user.email.lower():
            return False
        existing = await self.email_repo.get_by_email(invitation.email)
        if existing is not None:
            if existing.user_id != user.id:
                raise ValueError("This email is already linked to another account")
            return False
        self.email_repo.add(
            UserEmail(user_id=user.id, email=invitation.email.lower(), verified=True, is_primary=False)
        )
        await self.session.flush()
        return True

    async def _ensure_primary_email(self, user: Profile) -> None:
        if await self.email_repo.get_by_email(user.email) is None:
            self.email_repo.add(
                UserEmail(user_id=user.id, email=user.email.lower(), verified=True, is_primary=True)
            )

    async def _notify_inviter(self, invitation: TenantInvitation, user: Profile) -> None:
        notifications = NotificationService(
            NotificationRepository(self.session, invitation.tenant_id),
            NotificationPreferenceRepository(self.session, invitation.tenant_id),
            self.session,
        )
        await notifications.notify(
            invitation.invited_by,
            "Invitation accepted",
            f"{user.display_name} accepted your invitation.",
            NotificationType.INVITATION_ACCEPTED.value,
            entity_type="profiles",
            entity_id=user.id,
        )
