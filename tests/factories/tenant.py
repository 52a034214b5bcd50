"""Tenant, profile, membership and invitation factories."""

from datetime import timedelta

from polyfactory import Use

from src.crm.core.security import hash_token
from src.crm.models.enums import InvitationStatus, MembershipRole
from src.crm.models.public import Profile, Tenant, TenantInvitation, UserTenantMembership
from tests.factories.base import BaseFactory, generate_uuid, utc_now


class TenantFactory(BaseFactory):
    """Factory for generating Tenant test data."""

    __model__ = Tenant

    id = Use(generate_uuid)
    name = Use(lambda: f"Test Tenant {generate_uuid().hex[-8:]}")
    slug = Use(lambda: f"test-{generate_uuid().hex[-8:]}")
    is_active = True
    created_at = Use(utc_now)
    deleted_at = None

    @classmethod
    def inactive(cls, **kwargs):
        """Create an inactive tenant."""
        return cls.build(is_active=False, **kwargs)

    @classmethod
    def deleted(cls, **kwargs):
        """Create a soft-deleted tenant."""
        return cls.build(deleted_at=utc_now(), **kwargs)


class ProfileFactory(BaseFactory):
    """Factory for generating Profile test data."""

    __model__ = Profile

    id = Use(generate_uuid)
    email = Use(lambda: f"user_{generate_uuid().hex[-8:]}@example.com")
    first_name = "Test"
    last_name = "User"
    avatar_url = None
    is_active = True
    recovery_email = None
    is_recovery_email_verified = False
    recovery_email_token_hash = None
    recovery_email_token_expires_at = None
    created_at = Use(utc_now)
    updated_at = Use(utc_now)


class UserTenantMembershipFactory(BaseFactory):
    """Factory for generating UserTenantMembership test data."""

    __model__ = UserTenantMembership

    # FK fields - must be set explicitly
    user_id = None
    tenant_id = None
    role = MembershipRole.ADMIN.value
    is_active = True
    created_at = Use(utc_now)
    updated_at = Use(utc_now)

    @classmethod
    def member(cls, **kwargs):
        """Create a member role membership."""
        return cls.build(role=MembershipRole.MEMBER.value, **kwargs)


class TenantInvitationFactory(BaseFactory):
    """Factory for invitations; pass ``token`` to store its hash."""

    __model__ = TenantInvitation

    id = Use(generate_uuid)
    tenant_id = None
    invited_by = None
    email = Use(lambda: f"invitee_{generate_uuid().hex[-8:]}@example.com")
    role = MembershipRole.MEMBER.value
    token_hash = Use(lambda: hash_token(generate_uuid().hex))
    status = InvitationStatus.PENDING.value
    expires_at = Use(lambda: utc_now() + timedelta(days=7))
    created_at = Use(utc_now)
    accepted_at = None
    accepted_by_user_id = None

    @classmethod
    def with_token(cls, token: str, **kwargs):
        return cls.build(token_hash=hash_token(token), **kwargs)

    @classmethod
    def expired(cls, **kwargs):
        return cls.build(expires_at=utc_now() - timedelta(days=1), **kwargs)
