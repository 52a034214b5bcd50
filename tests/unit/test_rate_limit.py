"""Tests for slowapi limiter configuration."""

from unittest.mock import MagicMock

import pytest

from src.crm.core import rate_limit
from src.crm.core.config import get_settings

pytestmark = pytest.mark.unit


def test_limiter_disabled_in_testing():
    assert get_settings().app_env == "testing"
    assert rate_limit.limiter.enabled is False


def test_create_limiter_in_memory_when_redis_missing(monkeypatch):
    settings = MagicMock(app_env="production", redis_url=None)
    monkeypatch.setattr(rate_limit, "get_settings", lambda: settings)

    limiter = rate_limit.create_limiter()

    assert limiter.enabled is True


def test_rate_limit_key_ignores_tenant_header():
    """Rotating X-Tenant-ID must not create fresh buckets."""
    request = MagicMock()
    request.client.host = "10.0.0.7"
    request.headers = {"X-Tenant-ID": "11111111-1111-1111-1111-111111111111"}

    assert rate_limit.get_rate_limit_key(request) == "10.0.0.7"


def test_public_rate_limit_reads_settings(monkeypatch):
    monkeypatch.setattr(rate_limit, "get_settings", lambda: MagicMock(public_rate_limit="3/minute"))
    assert rate_limit.public_rate_limit() == "3/minute"
