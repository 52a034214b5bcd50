"""Factories for tenant-scoped CRM rows."""

from polyfactory import Use

from src.crm.models.enums import DealStatus, Priority, TodoStatus
from src.crm.models.tenant import Company, Contact, Deal, Device, Todo
from tests.factories.base import BaseFactory, generate_uuid, utc_now


class CompanyFactory(BaseFactory):
    __model__ = Company

    id = Use(generate_uuid)
    tenant_id = None
    name = Use(lambda: f"Company {generate_uuid().hex[-6:]}")
    description = None
    website = None
    industry = "Software"
    size = None
    phone = None
    email = None
    notes = None
    active = True
    deleted_at = None
    created_at = Use(utc_now)
    updated_at = Use(utc_now)


class ContactFactory(BaseFactory):
    __model__ = Contact

    id = Use(generate_uuid)
    tenant_id = None
    company_id = None
    first_name = "Ada"
    last_name = Use(lambda: f"Lovelace-{generate_uuid().hex[-6:]}")
    email = None
    phone = None
    position = None
    notes = None
    active = True
    deleted_at = None
    created_at = Use(utc_now)
    updated_at = Use(utc_now)


class DealFactory(BaseFactory):
    __model__ = Deal

    id = Use(generate_uuid)
    tenant_id = None
    company_id = None
    contact_id = None
    assigned_to = None
    created_by = None
    name = Use(lambda: f"Deal {generate_uuid().hex[-6:]}")
    description = None
    value = 1000.0
    status = DealStatus.LEAD.value
    probability = 10
    priority = Priority.MEDIUM.value
    expected_close_date = None
    notes = None
    deleted_at = None
    created_at = Use(utc_now)
    updated_at = Use(utc_now)


class TodoFactory(BaseFactory):
    __model__ = Todo

    id = Use(generate_uuid)
    tenant_id = None
    title = Use(lambda: f"Todo {generate_uuid().hex[-6:]}")
    description = None
    due_date = None
    status = TodoStatus.PENDING.value
    priority = Priority.MEDIUM.value
    entity_type = None
    entity_id = None
    created_by = None
    assigned_to = None
    completed_by = None
    completed_at = None
    deleted_at = None
    created_at = Use(utc_now)
    updated_at = Use(utc_now)


class DeviceFactory(BaseFactory):
    """Global catalog device by default (no tenant)."""

    __model__ = Device

    id = Use(generate_uuid)
    tenant_id = None
    name = Use(lambda: f"Router {generate_uuid().hex[-6:]}")
    category = "networking"
    brand = "Acme"
    model = "RX-1"
    unit_price = 199.0
    cost_price = 120.0
    msrp = 249.0
    specifications = Use(lambda: {"ports": 4})
    template_id = None
    template_properties = None
    image_url = None
    is_global = True
    source_device_id = None
    sync_version = 1
    last_synced_at = None
    active = True
    deleted_at = None
    created_at = Use(utc_now)
    updated_at = Use(utc_now)
