"""Profile and recovery email schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class ProfileRead(BaseModel):
    id: UUID
    email: str
    first_name: str | None
    last_name: str | None
    avatar_url: str | None
    recovery_email: str | None
    is_recovery_email_verified: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class ProfileUpdate(BaseModel):
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    avatar_url: str | None = Field(default=None, max_length=500)


class RecoveryEmailRequest(BaseModel):
    # Plain str: an address without "@" is a 400 from the service, not a 422.
    recovery_email: str = Field(min_length=1, max_length=255)


class RecoveryEmailRequestResponse(BaseModel):
    message: str = "Verification email sent"
    expires_at: datetime


class RecoveryEmailVerify(BaseModel):
    token: str = Field(min_length=1)


class RecoveryEmailVerifyResponse(BaseModel):
    success: bool = True
    message: str = "Recovery email verified successfully"
    recovery_email: str
