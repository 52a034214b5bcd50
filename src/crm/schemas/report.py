"""Report, report data and scheduled report schemas."""

from datetime import datetime
from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.crm.models.enums import ReportDataSource, ReportVisibility, ScheduleType
from src.crm.schemas.common import (
    PartialUpdate,
    clean_recipients,
    strip_optional_required,
    strip_required,
)


class FilterSpec(BaseModel):
    """One filter condition. Unknown operators or fields are ignored when applied."""

    field: str
    operator: str
    value: Any = None


class SortSpec(BaseModel):
    field: str
    direction: Literal["asc", "desc"] = "asc"


class QueryConfig(BaseModel):
    fields: list[str] = Field(default_factory=list)
    filters: list[FilterSpec] = Field(default_factory=list)
    sorting: list[SortSpec] = Field(default_factory=list)
    grouping: list[str] = Field(default_factory=list)


class ReportGenerateRequest(BaseModel):
    """Ad-hoc report run. data_source is a plain string so unsupported ones get a 400."""

    data_source: str
    query_config: QueryConfig = Field(default_factory=QueryConfig)


class ReportDataResponse(BaseModel):
    data: list[dict[str, Any]]
    count: int


class ReportExportResponse(BaseModel):
    success: bool
    html: str
    message: str


class ReportCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    name: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    data_source: ReportDataSource
    query_config: QueryConfig = Field(default_factory=QueryConfig)
    visibility: ReportVisibility = ReportVisibility.PRIVATE

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return strip_required(v, "Report name")


class ReportUpdate(PartialUpdate):
    model_config = ConfigDict(use_enum_values=True)
    not_nullable = ("name", "data_source", "query_config", "visibility")

    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    data_source: ReportDataSource | None = None
    query_config: QueryConfig | None = None
    visibility: ReportVisibility | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        return strip_optional_required(v, "Report name")


class ReportRead(BaseModel):
    id: UUID
    name: str
    description: str | None
    data_source: str
    query_config: dict[str, Any]
    visibility: str
    created_by: UUID
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ScheduledReportCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    report_id: UUID
    name: str = Field(min_length=1, max_length=200)
    schedule_type: ScheduleType = ScheduleType.DAILY
    schedule_config: dict[str, Any] = Field(default_factory=dict)
    email_recipients: list[str] = Field(default_factory=list)
    is_active: bool = True

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return strip_required(v, "Scheduled report name")

    @field_validator("email_recipients")
    @classmethod
    def validate_recipients(cls, v: list[str]) -> list[str]:
        return clean_recipients(v)


class ScheduledReportUpdate(PartialUpdate):
    model_config = ConfigDict(use_enum_values=True)
    not_nullable = ("name", "schedule_type", "schedule_config", "email_recipients", "is_active")

    name: str | None = Field(default=None, min_length=1, max_length=200)
    schedule_type: ScheduleType | None = None
    schedule_config: dict[str, Any] | None = None
    email_recipients: list[str] | None = None
    is_active: bool | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        return strip_optional_required(v, "Scheduled report name")

    @field_validator("email_recipients")
    @classmethod
    def validate_recipients(cls, v: list[str] | None) -> list[str] | None:
        if v is None:
            return None
        return clean_recipients(v)


class ScheduledReportRead(BaseModel):
    id: UUID
    report_id: UUID
    user_id: UUID
    name: str
    schedule_type: str
    schedule_config: dict[str, Any]
    email_recipients: list[str]
    is_active: bool
    last_run_at: datetime | None
    next_run_at: datetime | None
    created_at: datetime

    model_config = {"from_attributes": True}


class ScheduledReportRunResult(BaseModel):
    scheduled_report_id: UUID
    success: bool
    emails_sent: int = 0
    row_count: int = 0
    error: str | None = None


class DueRunResponse(BaseModel):
    """Outcome of triggering a due-reports pass.

    ``dispatched`` is True when a worker picked the pass up; otherwise it ran
    in-process and ``results`` holds the per-report outcomes.
    """

    dispatched: bool
    workflow_id: str | None = None
    results: list[ScheduledReportRunResult] = Field(default_factory=list)
