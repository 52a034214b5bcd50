"""Saved report definitions and their email schedules."""

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import JSON, Column
from sqlmodel import Field

from src.crm.models.base import TenantScopedModel
from src.crm.models.enums import ReportVisibility, ScheduleType


class Report(TenantScopedModel, table=True):
    __tablename__ = "reports"

    name: str = Field(max_length=200, index=True)
    description: str | None = Field(default=None, max_length=2000)
    data_source: str = Field(max_length=50)
    query_config: dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))
    visibility: str = Field(default=ReportVisibility.PRIVATE.value, max_length=20)
    created_by: UUID = Field(foreign_key="profiles.id")
    active: bool = Field(default=True)


class ScheduledReport(TenantScopedModel, table=True):
    __tablename__ = "scheduled_reports"

    report_id: UUID = Field(foreign_key="reports.id", index=True)
    user_id: UUID = Field(foreign_key="profiles.id")
    name: str = Field(max_length=200)
    schedule_type: str = Field(default=ScheduleType.DAILY.value, max_length=20)
    schedule_config: dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))
    email_recipients: list[str] = Field(default_factory=list, sa_column=Column(JSON))
    is_active: bool = Field(default=True, index=True)
    last_run_at: datetime | None = Field(default=None)
    next_run_at: datetime | None = Field(default=None, index=True)
