"""Repositories for Profile and UserEmail entities."""

from uuid import UUID

from sqlalchemy import func, update
from sqlmodel import select

from src.crm.models.base import utc_now
from src.crm.models.public import Profile, UserEmail
from src.crm.repositories.base import BaseRepository


class ProfileRepository(BaseRepository[Profile]):
    model = Profile

    async def get_by_recovery_email(self, email: str) -> Profile | None:
        result = await self.session.execute(
            select(Profile).where(func.lower(Profile.recovery_email) == email.lower())
        )
        return result.scalars().first()

    async def get_by_recovery_token_hash(self, token_hash: str) -> Profile | None:
        result = await self.session.execute(
            select(Profile).where(Profile.recovery_email_token_hash == token_hash)
        )
        return result.scalar_one_or_none()

    async def clear_expired_recovery_tokens(self) -> int:
        """Drop recovery-email tokens past their expiry (caller commits).

        Returns:
            Number of profiles updated
        """
        result = await self.session.execute(
            update(Profile)
            .where(Profile.recovery_email_token_hash.is_not(None))  # type: ignore[union-attr]
            .where(Profile.recovery_email_token_expires_at < utc_now())  # type: ignore[operator]
            .values(recovery_email_token_hash=None, recovery_email_token_expires_at=None)
        )
        return result.rowcount or 0  # type: ignore[attr-defined]


class UserEmailRepository(BaseRepository[UserEmail]):
    model = UserEmail

    async def get_by_email(self, email: str) -> UserEmail | None:
        """Emails are unique across users, compared case-insensitively."""
        result = await self.session.execute(
            select(UserEmail).where(func.lower(UserEmail.email) == email.lower())
        )
        return result.scalar_one_or_none()

    async def list_for_user(self, user_id: UUID) -> list[UserEmail]:
        result = await self.session.execute(
            select(UserEmail)
            .where(UserEmail.user_id == user_id)
            .order_by(UserEmail.is_primary.desc(), UserEmail.created_at)  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())
