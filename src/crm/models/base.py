from datetime import UTC, datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel


def utc_now() -> datetime:
    """Return current UTC time as naive datetime.

    Columns are TIMESTAMP WITHOUT TIME ZONE; all times are UTC by convention.
    """
    return datetime.now(UTC).replace(tzinfo=None)


class TenantScopedModel(SQLModel):
    """Columns shared by every row that belongs to exactly one tenant."""

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", index=True)
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)


class SoftDeleteMixin(SQLModel):
    """Rows are hidden, not removed, when deleted through the API."""

    deleted_at: datetime | None = Field(default=None, index=True)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None
