"""Device catalog and device templates.

Global catalog rows have no tenant_id and is_global=True. Tenants import
them as their own rows and keep a pointer back to the source so later
catalog changes can be synced.
"""

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

from src.crm.models.base import SoftDeleteMixin, utc_now
from src.crm.models.enums import TemplateImportStatus


class Device(SoftDeleteMixin, table=True):
    __tablename__ = "devices"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: UUID | None = Field(default=None, foreign_key="tenants.id", index=True)
    name: str = Field(max_length=200, index=True)
    category: str = Field(max_length=100, index=True)
    brand: str | None = Field(default=None, max_length=100)
    model: str | None = Field(default=None, max_length=100)
    unit_price: float | None = Field(default=None)
    cost_price: float | None = Field(default=None)
    msrp: float | None = Field(default=None)
    specifications: dict[str, Any] | None = Field(default=None, sa_column=Column(JSON))
    template_id: UUID | None = Field(default=None, foreign_key="device_templates.id")
    template_properties: dict[str, Any] | None = Field(default=None, sa_column=Column(JSON))
    image_url: str | None = Field(default=None, max_length=500)
    is_global: bool = Field(default=False, index=True)
    source_device_id: UUID | None = Field(default=None, foreign_key="devices.id", index=True)
    sync_version: int = Field(default=1)
    last_synced_at: datetime | None = Field(default=None)
    active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)


class DeviceTemplate(SQLModel, table=True):
    __tablename__ = "device_templates"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: UUID | None = Field(default=None, foreign_key="tenants.id", index=True)
    name: str = Field(max_length=200, index=True)
    category: str = Field(max_length=100)
    description: str | None = Field(default=None, max_length=2000)
    properties_schema: dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))
    is_global: bool = Field(default=False, index=True)
    source_template_id: UUID | None = Field(default=None, foreign_key="device_templates.id")
    import_status: str = Field(default=TemplateImportStatus.LOCAL.value, max_length=20)
    template_version: int | None = Field(default=None)
    sync_version: int = Field(default=1)
    created_by: UUID | None = Field(default=None, foreign_key="profiles.id")
    active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)
