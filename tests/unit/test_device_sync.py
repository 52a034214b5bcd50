"""Tests for catalog sync rules."""

import pytest

from src.crm.services.device_service import SYNC_FIELDS, copy_sync_fields, needs_update
from tests.factories import DeviceFactory, generate_uuid

pytestmark = pytest.mark.unit


def test_needs_update_compares_versions():
    source = DeviceFactory.build(sync_version=3)
    local = DeviceFactory.build(is_global=False, tenant_id=generate_uuid(), sync_version=2)

    assert needs_update(local, source) is True
    local.sync_version = 3
    assert needs_update(local, source) is False


def test_needs_update_without_source():
    assert needs_update(DeviceFactory.build(), None) is False


def test_copy_sync_fields_copies_catalog_values():
    source = DeviceFactory.build(name="Switch 24", unit_price=499.0, sync_version=4)
    tenant_id = generate_uuid()
    local = DeviceFactory.build(
        tenant_id=tenant_id,
        is_global=False,
        name="Old name",
        unit_price=1.0,
        sync_version=1,
        source_device_id=source.id,
    )

    copy_sync_fields(local, source)

    for field in SYNC_FIELDS:
        assert getattr(local, field) == getattr(source, field)
    assert local.last_synced_at is not None
    # Identity and ownership are never copied
    assert local.tenant_id == tenant_id
    assert local.is_global is False
    assert local.source_device_id == source.id


def test_copy_sync_fields_does_not_share_dicts():
    source = DeviceFactory.build(specifications={"ports": 8})
    local = DeviceFactory.build(is_global=False, tenant_id=generate_uuid())

    copy_sync_fields(local, source)
    local.specifications["ports"] = 16

    assert source.specifications == {"ports": 8}
