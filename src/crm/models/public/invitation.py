"""Tenant invitation model."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.crm.models.base import utc_now
from src.crm.models.enums import InvitationStatus, MembershipRole


class TenantInvitation(SQLModel, table=True):
    """Invitation to join a tenant. Only the SHA256 of the token is stored."""

    __tablename__ = "tenant_invitations"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", index=True)
    email: str = Field(max_length=255, index=True)
    role: str = Field(default=MembershipRole.MEMBER.value, max_length=50)
    token_hash: str = Field(max_length=255, unique=True, index=True)
    invited_by: UUID = Field(foreign_key="profiles.id")
    status: str = Field(default=InvitationStatus.PENDING.value, max_length=20)
    expires_at: datetime
    created_at: datetime = Field(default_factory=utc_now)
    accepted_at: datetime | None = Field(default=None)
    accepted_by_user_id: UUID | None = Field(default=None, foreign_key="profiles.id")
