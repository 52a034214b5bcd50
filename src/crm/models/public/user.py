"""User identity models.

Accounts live in the hosted auth provider; a Profile mirrors the provider
user locally and shares its id.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from src.crm.models.base import utc_now
from src.crm.models.enums import MembershipRole


class Profile(SQLModel, table=True):
    """Local mirror of an auth-provider user."""

    __tablename__ = "profiles"

    id: UUID = Field(primary_key=True)
    email: str = Field(max_length=255, index=True)
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    avatar_url: str | None = Field(default=None, max_length=500)
    is_active: bool = Field(default=True)

    recovery_email: str | None = Field(default=None, max_length=255, index=True)
    is_recovery_email_verified: bool = Field(default=False)
    recovery_email_token_hash: str | None = Field(default=None, max_length=255, index=True)
    recovery_email_token_expires_at: datetime | None = Field(default=None)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def display_name(self) -> str:
        full_name = " ".join(part for part in (self.first_name, self.last_name) if part)
        return full_name or self.email


class UserEmail(SQLModel, table=True):
    """Every address a user is known by; an address belongs to one user only."""

    __tablename__ = "user_emails"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="profiles.id", index=True)
    email: str = Field(max_length=255, unique=True, index=True)
    verified: bool = Field(default=False)
    is_primary: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utc_now)


class UserTenantMembership(SQLModel, table=True):
    """User membership in a tenant."""

    __tablename__ = "user_tenant_memberships"
    __table_args__ = (UniqueConstraint("user_id", "tenant_id", name="uq_membership_user_tenant"),)

    user_id: UUID = Field(foreign_key="profiles.id", primary_key=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", primary_key=True, index=True)
    role: str = Field(default=MembershipRole.MEMBER.value, max_length=50)
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def is_admin(self) -> bool:
        return self.role in (MembershipRole.OWNER.value, MembershipRole.ADMIN.value)
