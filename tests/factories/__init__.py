"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import ProfileFactory, TenantFactory, ...
"""

from tests.factories.base import BaseFactory, generate_uuid, utc_now
from tests.factories.crm import (
    CompanyFactory,
    ContactFactory,
    DealFactory,
    DeviceFactory,
    TodoFactory,
)
from tests.factories.tenant import (
    ProfileFactory,
    TenantFactory,
    TenantInvitationFactory,
    UserTenantMembershipFactory,
)

__all__ = [
    # Base
    "BaseFactory",
    "generate_uuid",
    "utc_now",
    # Tenancy
    "ProfileFactory",
    "TenantFactory",
    "TenantInvitationFactory",
    "UserTenantMembershipFactory",
    # CRM
    "CompanyFactory",
    "ContactFactory",
    "DealFactory",
    "DeviceFactory",
    "TodoFactory",
]
