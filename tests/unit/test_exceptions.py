"""Tests for mapping service errors onto HTTP statuses."""

import pytest
from fastapi import HTTPException

from src.crm.core.exceptions import (
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    raise_http_error,
)

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("error", "status_code"),
    [
        (NotFoundError("Deal not found"), 404),
        (ConflictError("Deal already has a contract"), 409),
        (PermissionDeniedError("Admin role required"), 403),
        (ValueError("Unsupported data source: widgets"), 400),
    ],
)
def test_raise_http_error_maps_status(error, status_code):
    with pytest.raises(HTTPException) as exc_info:
        raise_http_error(error)

    assert exc_info.value.status_code == status_code
    assert exc_info.value.detail == str(error)
    assert exc_info.value.__cause__ is error


def test_domain_errors_are_value_errors():
    """Routes catch ValueError, so every domain error must be one."""
    for cls in (NotFoundError, ConflictError, PermissionDeniedError):
        assert issubclass(cls, ValueError)
