"""Notification and notification preference schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class NotificationRead(BaseModel):
    id: UUID
    title: str
    message: str
    notification_type: str
    entity_type: str | None
    entity_id: UUID | None
    read_at: datetime | None
    is_read: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class UnreadCountResponse(BaseModel):
    unread_count: int


class MarkAllReadResponse(BaseModel):
    updated: int


class NotificationPreferenceUpdate(BaseModel):
    notification_type: str = Field(min_length=1, max_length=50)
    enabled: bool


class NotificationPreferenceRead(BaseModel):
    notification_type: str
    enabled: bool
    updated_at: datetime

    model_config = {"from_attributes": True}
