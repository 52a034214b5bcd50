"""Device and device template schemas."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.crm.schemas.common import PartialUpdate, strip_optional_required, strip_required


class DeviceCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    category: str = Field(min_length=1, max_length=100)
    brand: str | None = Field(default=None, max_length=100)
    model: str | None = Field(default=None, max_length=100)
    unit_price: float | None = Field(default=None, ge=0)
    cost_price: float | None = Field(default=None, ge=0)
    msrp: float | None = Field(default=None, ge=0)
    specifications: dict[str, Any] | None = None
    template_id: UUID | None = None
    template_properties: dict[str, Any] | None = None
    image_url: str | None = Field(default=None, max_length=500)

    @field_validator("name", "category")
    @classmethod
    def validate_required_text(cls, v: str) -> str:
        return strip_required(v, "Device name and category")


class DeviceUpdate(PartialUpdate):
    not_nullable = ("name", "category", "active")

    name: str | None = Field(default=None, min_length=1, max_length=200)
    category: str | None = Field(default=None, min_length=1, max_length=100)
    brand: str | None = Field(default=None, max_length=100)
    model: str | None = Field(default=None, max_length=100)
    unit_price: float | None = Field(default=None, ge=0)
    cost_price: float | None = Field(default=None, ge=0)
    msrp: float | None = Field(default=None, ge=0)
    specifications: dict[str, Any] | None = None
    template_id: UUID | None = None
    template_properties: dict[str, Any] | None = None
    image_url: str | None = Field(default=None, max_length=500)
    active: bool | None = None

    @field_validator("name", "category")
    @classmethod
    def validate_required_text(cls, v: str | None) -> str | None:
        return strip_optional_required(v, "Device name and category")


class DeviceRead(BaseModel):
    id: UUID
    tenant_id: UUID | None
    name: str
    category: str
    brand: str | None
    model: str | None
    unit_price: float | None
    cost_price: float | None
    msrp: float | None
    specifications: dict[str, Any] | None
    template_id: UUID | None
    template_properties: dict[str, Any] | None
    image_url: str | None
    is_global: bool
    source_device_id: UUID | None
    sync_version: int
    last_synced_at: datetime | None
    active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class DeviceSyncStatus(BaseModel):
    device: DeviceRead
    source_sync_version: int
    needs_update: bool


class BulkSyncResponse(BaseModel):
    updated: int


class DeviceTemplateCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    category: str = Field(min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=2000)
    properties_schema: dict[str, Any] = Field(default_factory=dict)

    @field_validator("name", "category")
    @classmethod
    def validate_required_text(cls, v: str) -> str:
        return strip_required(v, "Template name and category")


class DeviceTemplateUpdate(PartialUpdate):
    not_nullable = ("name", "category", "properties_schema", "active")

    name: str | None = Field(default=None, min_length=1, max_length=200)
    category: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=2000)
    properties_schema: dict[str, Any] | None = None
    active: bool | None = None

    @field_validator("name", "category")
    @classmethod
    def validate_required_text(cls, v: str | None) -> str | None:
        return strip_optional_required(v, "Template name and category")


class DeviceTemplateRead(BaseModel):
    id: UUID
    tenant_id: UUID | None
    name: str
    category: str
    description: str | None
    properties_schema: dict[str, Any]
    is_global: bool
    source_template_id: UUID | None
    import_status: str
    template_version: int | None
    sync_version: int
    active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
