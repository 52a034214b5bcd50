"""Identity and tenancy repositories."""

from src.crm.repositories.public.invitation import TenantInvitationRepository
from src.crm.repositories.public.membership import MembershipRepository
from src.crm.repositories.public.profile import ProfileRepository, UserEmailRepository
from src.crm.repositories.public.tenant import TenantRepository

__all__ = [
    "MembershipRepository",
    "ProfileRepository",
    "TenantInvitationRepository",
    "TenantRepository",
    "UserEmailRepository",
]
