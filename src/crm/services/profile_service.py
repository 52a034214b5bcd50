"""Local profiles of auth-provider users and recovery email verification."""

import asyncio
from datetime import datetime, timedelta
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from src.crm.core.config import get_settings
from src.crm.core.exceptions import ConflictError, NotFoundError
from src.crm.core.logging import get_logger
from src.crm.core.notifications import send_recovery_verification_email
from src.crm.core.security import generate_token, hash_token
from src.crm.models.base import utc_now
from src.crm.models.public import Profile, UserEmail
from src.crm.repositories import ProfileRepository, UserEmailRepository

logger = get_logger(__name__)


class ProfileService:
    def __init__(
        self,
        profile_repo: ProfileRepository,
        email_repo: UserEmailRepository,
        session: AsyncSession,
    ):
        self.profile_repo = profile_repo
        self.email_repo = email_repo
        self.session = session

    async def get_or_create(self, user_id: UUID, email: str) -> Profile:
        """Return the profile for a token subject, creating it on first sight.

        The primary UserEmail row is created alongside unless the address is
        already linked to someone else.
        """
        profile = await self.profile_repo.get_by_id(user_id)
        if profile is not None:
            return profile

        try:
            profile = Profile(id=user_id, email=email.strip().lower())
            self.profile_repo.add(profile)
            if await self.email_repo.get_by_email(profile.email) is None:
                self.email_repo.add(
                    UserEmail(user_id=user_id, email=profile.email, verified=True, is_primary=True)
                )
            await self.session.commit()
            await self.session.refresh(profile)
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to create profile", user_id=str(user_id), error=str(e))
            raise

        logger.info("Profile created", user_id=str(user_id))
        return profile

    async def update_profile(self, profile: Profile, data: BaseModel) -> Profile:
        try:
            for field, value in data.model_dump(exclude_unset=True).items():
                if isinstance(value, str):
                    value = value.strip() or None
                setattr(profile, field, value)
            profile.updated_at = utc_now()
            self.session.add(profile)
            await self.session.commit()
            await self.session.refresh(profile)
            return profile
        except Exception:
            await self.session.rollback()
            raise

    async def request_recovery_email(self, profile: Profile, recovery_email: str) -> datetime:
        """Store an unverified recovery email and send the verification link.

        Returns:
            Expiry of the verification token.

        Raises:
            ValueError: Not an email address.
            ConflictError: Another profile already uses the address.
        """
        settings = get_settings()
        recovery_email = recovery_email.strip().lower()
        if "@" not in recovery_email:
            raise ValueError("Invalid email address")

        existing = await self.profile_repo.get_by_recovery_email(recovery_email)
        if existing is not None and existing.id != profile.id:
            raise ConflictError("This email is already used as a recovery email by another account")

        token = generate_token()
        expires_at = utc_now() + timedelta(hours=settings.recovery_email_expire_hours)
        try:
            profile.recovery_email = recovery_email
            profile.is_recovery_email_verified = False
            profile.recovery_email_token_hash = hash_token(token)
            profile.recovery_email_token_expires_at = expires_at
            profile.updated_at = utc_now()
            self.session.add(profile)
            await self.session.commit()
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to set recovery email", user_id=str(profile.id), error=str(e))
            raise

        await asyncio.to_thread(
            send_recovery_verification_email,
            to=recovery_email,
            token=token,
            user_name=profile.display_name,
        )
        logger.info("Recovery email verification sent", user_id=str(profile.id))
        return expires_at

    async def verify_recovery_email(self, token: str) -> str:
        """Mark the recovery email behind a token verified.

        Returns:
            The verified recovery email.
        """
        profile = await self.profile_repo.get_by_recovery_token_hash(hash_token(token))
        if profile is None or profile.recovery_email is None:
            raise NotFoundError("Invalid or expired verification token")
        expires_at = profile.recovery_email_token_expires_at
        if expires_at is None or expires_at < utc_now():
            raise ValueError("Verification token has expired. Please request a new one.")

        recovery_email = profile.recovery_email
        try:
            profile.is_recovery_email_verified = True
            profile.recovery_email_token_hash = None
            profile.recovery_email_token_expires_at = None
            profile.updated_at = utc_now()
            self.session.add(profile)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Recovery email verified", user_id=str(profile.id))
        return recovery_email
