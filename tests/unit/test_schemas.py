"""Tests for request schema validation."""

import pytest
from pydantic import ValidationError

from src.crm.schemas.deal import DealCreate, DealMove, DealUpdate
from src.crm.schemas.report import ScheduledReportCreate, ScheduledReportUpdate
from src.crm.schemas.tenant import TenantCreate
from tests.factories import generate_uuid

pytestmark = pytest.mark.unit


def test_blank_names_are_rejected():
    with pytest.raises(ValidationError, match="cannot be empty"):
        DealCreate(name="   ")


def test_names_are_stripped():
    assert DealCreate(name="  Big deal ").name == "Big deal"


def test_partial_update_keeps_unset_fields_out():
    update = DealUpdate(probability=50)
    assert update.model_dump(exclude_unset=True) == {"probability": 50}


def test_explicit_null_rejected_for_required_columns():
    with pytest.raises(ValidationError, match="name cannot be null"):
        DealUpdate(name=None)
    with pytest.raises(ValidationError, match="is_active cannot be null"):
        ScheduledReportUpdate.model_validate({"is_active": None})


def test_explicit_null_clears_optional_columns():
    update = DealUpdate.model_validate({"notes": None, "company_id": None})
    assert update.model_dump(exclude_unset=True) == {"notes": None, "company_id": None}


def test_deal_move_bounds_probability():
    with pytest.raises(ValidationError):
        DealMove(status="won", probability=101)
    assert DealMove(status="won", probability=100).status == "won"


def test_recipients_drop_blanks_and_reject_non_addresses():
    scheduled = ScheduledReportCreate(
        report_id=generate_uuid(), name="Weekly", email_recipients=["a@example.com", "  "]
    )
    assert scheduled.email_recipients == ["a@example.com"]

    with pytest.raises(ValidationError, match="Invalid recipient address"):
        ScheduledReportCreate(report_id=generate_uuid(), name="Weekly", email_recipients=["nobody"])


def test_tenant_slug_minimum_length():
    with pytest.raises(ValidationError):
        TenantCreate(name="Acme", slug="ab")
