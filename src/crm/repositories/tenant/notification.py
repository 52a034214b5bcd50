"""Repositories for notifications and notification preferences."""

from uuid import UUID

from sqlalchemy import update
from sqlmodel import select

from src.crm.models.base import utc_now
from src.crm.models.tenant import Notification, NotificationPreference
from src.crm.repositories.base import TenantScopedRepository


class NotificationRepository(TenantScopedRepository[Notification]):
    model = Notification

    async def get_for_user(self, notification_id: UUID, user_id: UUID) -> Notification | None:
        result = await self.session.execute(
            self.scoped_query().where(
                Notification.id == notification_id,
                Notification.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    async def recent_for_user(self, user_id: UUID, limit: int = 5) -> list[Notification]:
        result = await self.session.execute(
            self.scoped_query()
            .where(Notification.user_id == user_id)
            .order_by(Notification.created_at.desc())  # type: ignore[attr-defined]
            .limit(limit)
        )
        return list(result.scalars().all())

    async def count_unread(self, user_id: UUID) -> int:
        return await self.count(
            Notification.user_id == user_id,
            Notification.read_at.is_(None),  # type: ignore[union-attr]
        )

    async def mark_all_read(self, user_id: UUID) -> int:
        """Set read_at on every unread notification of the user (caller commits)."""
        result = await self.session.execute(
            update(Notification)
            .where(Notification.tenant_id == self.tenant_id)  # type: ignore[arg-type]
            .where(Notification.user_id == user_id)  # type: ignore[arg-type]
            .where(Notification.read_at.is_(None))  # type: ignore[union-attr]
            .values(read_at=utc_now())
        )
        return result.rowcount or 0  # type: ignore[attr-defined]


class NotificationPreferenceRepository(TenantScopedRepository[NotificationPreference]):
    model = NotificationPreference

    async def get_for_type(
        self, user_id: UUID, notification_type: str
    ) -> NotificationPreference | None:
        result = await self.session.execute(
            self.scoped_query().where(
                NotificationPreference.user_id == user_id,
                NotificationPreference.notification_type == notification_type,
            )
        )
        return result.scalar_one_or_none()

    async def list_for_user(self, user_id: UUID) -> list[NotificationPreference]:
        result = await self.session.execute(
            select(NotificationPreference)
            .where(
                NotificationPreference.tenant_id == self.tenant_id,
                NotificationPreference.user_id == user_id,
            )
            .order_by(NotificationPreference.notification_type)
        )
        return list(result.scalars().all())
