"""Todo schemas."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.crm.models.enums import Priority, TodoStatus
from src.crm.schemas.common import (
    PartialUpdate,
    blank_to_none,
    strip_optional_required,
    strip_required,
)


class TodoCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    title: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    due_date: date | None = None
    status: TodoStatus = TodoStatus.PENDING
    priority: Priority = Priority.MEDIUM
    entity_type: str | None = Field(default=None, max_length=50)
    entity_id: UUID | None = None
    assigned_to: UUID | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return strip_required(v, "Todo title")

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        return blank_to_none(v)


class TodoUpdate(PartialUpdate):
    model_config = ConfigDict(use_enum_values=True)
    not_nullable = ("title", "status", "priority")

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    due_date: date | None = None
    status: TodoStatus | None = None
    priority: Priority | None = None
    entity_type: str | None = Field(default=None, max_length=50)
    entity_id: UUID | None = None
    assigned_to: UUID | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str | None) -> str | None:
        return strip_optional_required(v, "Todo title")


class TodoRead(BaseModel):
    id: UUID
    title: str
    description: str | None
    due_date: date | None
    status: str
    priority: str
    entity_type: str | None
    entity_id: UUID | None
    created_by: UUID | None
    assigned_to: UUID | None
    completed_by: UUID | None
    completed_at: datetime | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class TodoCompleteResult(BaseModel):
    todo: TodoRead
    points_awarded: int = 0
