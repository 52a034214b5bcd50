"""Tenant invitation schemas."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator


class InvitationCreate(BaseModel):
    email: EmailStr
    role: Literal["admin", "member"] = "member"


class InvitationRead(BaseModel):
    id: UUID
    email: str
    role: str
    status: str
    expires_at: datetime
    created_at: datetime
    invited_by: UUID

    model_config = {"from_attributes": True}


class InvitationInfoResponse(BaseModel):
    """Public info shown before an invitation is accepted."""

    tenant_name: str
    email: str
    role: str
    expires_at: datetime


class InvitationAccept(BaseModel):
    token: str = Field(min_length=1)
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)

    @field_validator("first_name", "last_name")
    @classmethod
    def strip_names(cls, v: str | None) -> str | None:
        if v is not None:
            v = v.strip() or None
        return v


class InvitationLink(BaseModel):
    token: str = Field(min_length=1)


class InvitationAcceptResponse(BaseModel):
    tenant_id: UUID
    tenant_name: str
    role: str
    already_member: bool
    secondary_email_added: bool
