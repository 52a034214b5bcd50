"""In-app notifications and per-type preferences."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import UniqueConstraint
from sqlmodel import Field

from src.crm.models.base import TenantScopedModel


class Notification(TenantScopedModel, table=True):
    __tablename__ = "notifications"

    user_id: UUID = Field(foreign_key="profiles.id", index=True)
    title: str = Field(max_length=200)
    message: str = Field(max_length=2000)
    notification_type: str = Field(max_length=50, index=True)
    entity_type: str | None = Field(default=None, max_length=50)
    entity_id: UUID | None = Field(default=None)
    read_at: datetime | None = Field(default=None, index=True)
    notes: str | None = Field(default=None)

    @property
    def is_read(self) -> bool:
        return self.read_at is not None


class NotificationPreference(TenantScopedModel, table=True):
    __tablename__ = "notification_preferences"
    __table_args__ = (
        UniqueConstraint(
            "user_id", "tenant_id", "notification_type", name="uq_notification_preference"
        ),
    )

    user_id: UUID = Field(foreign_key="profiles.id", index=True)
    notification_type: str = Field(max_length=50)
    enabled: bool = Field(default=True)
