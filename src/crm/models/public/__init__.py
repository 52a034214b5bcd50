"""Identity and tenancy models, shared by all tenants."""

from src.crm.models.enums import InvitationStatus, MembershipRole
from src.crm.models.public.invitation import TenantInvitation
from src.crm.models.public.tenant import Tenant
from src.crm.models.public.user import Profile, UserEmail, UserTenantMembership

__all__ = [
    # Enums
    "InvitationStatus",
    "MembershipRole",
    # Models
    "Profile",
    "Tenant",
    "TenantInvitation",
    "UserEmail",
    "UserTenantMembership",
]
