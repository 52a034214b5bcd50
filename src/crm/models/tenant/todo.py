"""Todo items, optionally attached to any other entity."""

from datetime import date, datetime
from uuid import UUID

from sqlmodel import Field

from src.crm.models.base import SoftDeleteMixin, TenantScopedModel
from src.crm.models.enums import Priority, TodoStatus


class Todo(TenantScopedModel, SoftDeleteMixin, table=True):
    __tablename__ = "todos"

    title: str = Field(max_length=200, index=True)
    description: str | None = Field(default=None, max_length=2000)
    due_date: date | None = Field(default=None)
    status: str = Field(default=TodoStatus.PENDING.value, max_length=20, index=True)
    priority: str = Field(default=Priority.MEDIUM.value, max_length=10)
    entity_type: str | None = Field(default=None, max_length=50)
    entity_id: UUID | None = Field(default=None)
    created_by: UUID | None = Field(default=None, foreign_key="profiles.id")
    assigned_to: UUID | None = Field(default=None, foreign_key="profiles.id", index=True)
    completed_by: UUID | None = Field(default=None, foreign_key="profiles.id")
    completed_at: datetime | None = Field(default=None)

    @property
    def is_completed(self) -> bool:
        return self.status == TodoStatus.COMPLETED.value
