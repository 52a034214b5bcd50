"""Validators shared by request schemas."""

from typing import ClassVar, Self

from pydantic import BaseModel, model_validator


class PartialUpdate(BaseModel):
    """Body of a PATCH request: omitted fields stay unchanged.

    Fields listed in ``not_nullable`` back NOT NULL columns, so an explicit
    null for them is a validation error rather than "clear this value".
    """

    not_nullable: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="after")
    def reject_explicit_nulls(self) -> Self:
        for name in self.not_nullable:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


def strip_required(value: str, label: str) -> str:
    """Strip a required text field; reject blanks."""
    value = value.strip()
    if not value:
        raise ValueError(f"{label} cannot be empty or whitespace only")
    return value


def strip_optional_required(value: str | None, label: str) -> str | None:
    """Like strip_required, for PATCH bodies; nulls are handled by PartialUpdate."""
    if value is None:
        return None
    return strip_required(value, label)


def blank_to_none(value: str | None) -> str | None:
    """Strip optional text; store blanks as NULL."""
    if value is not None:
        value = value.strip()
        if not value:
            return None
    return value


def clean_recipients(addresses: list[str]) -> list[str]:
    """Drop blank recipient entries; every remaining one must look like an address."""
    recipients = [address.strip() for address in addresses if address.strip()]
    for address in recipients:
        if "@" not in address:
            raise ValueError(f"Invalid recipient address: {address}")
    return recipients
