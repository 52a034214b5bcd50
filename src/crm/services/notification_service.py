"""In-app notifications with cached unread counters."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.crm.core.cache import (
    get_cached_unread_count,
    invalidate_unread_count,
    set_cached_unread_count,
)
from src.crm.core.exceptions import NotFoundError
from src.crm.core.logging import get_logger
from src.crm.models.base import utc_now
from src.crm.models.tenant import Notification, NotificationPreference
from src.crm.repositories import NotificationPreferenceRepository, NotificationRepository

logger = get_logger(__name__)


class NotificationService:
    """Notifications of one tenant, always read per recipient."""

    def __init__(
        self,
        notification_repo: NotificationRepository,
        preference_repo: NotificationPreferenceRepository,
        session: AsyncSession,
    ):
        self.notification_repo = notification_repo
        self.preference_repo = preference_repo
        self.session = session
        self.tenant_id = notification_repo.tenant_id

    async def notify(
        self,
        user_id: UUID,
        title: str,
        message: str,
        notification_type: str,
        entity_type: str | None = None,
        entity_id: UUID | None = None,
    ) -> Notification | None:
        """Create and commit a notification unless the recipient disabled the type.

        Returns:
            The notification, or None when suppressed by a preference.
        """
        preference = await self.preference_repo.get_for_type(user_id, notification_type)
        if preference is not None and not preference.enabled:
            logger.debug(
                "Notification suppressed by preference",
                user_id=str(user_id),
                notification_type=notification_type,
            )
            return None

        try:
            notification = Notification(
                tenant_id=self.tenant_id,
                user_id=user_id,
                title=title,
                message=message,
                notification_type=notification_type,
                entity_type=entity_type,
                entity_id=entity_id,
            )
            self.notification_repo.add(notification)
            await self.session.commit()
            await self.session.refresh(notification)
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to create notification", user_id=str(user_id), error=str(e))
            raise

        await invalidate_unread_count(self.tenant_id, user_id)
        return notification

    async def recent(self, user_id: UUID, limit: int = 5) -> list[Notification]:
        return await self.notification_repo.recent_for_user(user_id, limit)

    async def list_page(
        self, user_id: UUID, cursor: str | None, limit: int
    ) -> tuple[list[Notification], str | None, bool]:
        return await self.notification_repo.list_page(cursor, limit, user_id=user_id)

    async def unread_count(self, user_id: UUID) -> int:
        cached = await get_cached_unread_count(self.tenant_id, user_id)
        if cached is not None:
            return cached
        count = await self.notification_repo.count_unread(user_id)
        await set_cached_unread_count(self.tenant_id, user_id, count)
        return count

    async def mark_read(self, notification_id: UUID, user_id: UUID) -> Notification:
        """Set read_at once; marking an already read notification is a no-op."""
        notification = await self.notification_repo.get_for_user(notification_id, user_id)
        if notification is None:
            raise NotFoundError("Notification not found")
        if notification.read_at is not None:
            return notification

        try:
            notification.read_at = utc_now()
            notification.updated_at = utc_now()
            self.session.add(notification)
            await self.session.commit()
            await self.session.refresh(notification)
        except Exception:
            await self.session.rollback()
            raise

        await invalidate_unread_count(self.tenant_id, user_id)
        return notification

    async def mark_all_read(self, user_id: UUID) -> int:
        try:
            updated = await self.notification_repo.mark_all_read(user_id)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        await invalidate_unread_count(self.tenant_id, user_id)
        logger.info("Notifications marked read", user_id=str(user_id), updated=updated)
        return updated

    async def list_preferences(self, user_id: UUID) -> list[NotificationPreference]:
        return await self.preference_repo.list_for_user(user_id)

    async def set_preference(
        self, user_id: UUID, notification_type: str, enabled: bool
    ) -> NotificationPreference:
        try:
            preference = await self.preference_repo.get_for_type(user_id, notification_type)
            if preference is None:
                preference = NotificationPreference(
                    tenant_id=self.tenant_id,
                    user_id=user_id,
                    notification_type=notification_type,
                )
            preference.enabled = enabled
            preference.updated_at = utc_now()
            self.session.add(preference)
            await self.session.commit()
            await self.session.refresh(preference)
            return preference
        except Exception:
            await self.session.rollback()
            raise
