"""Pagination schemas for cursor-based pagination."""

import base64
from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class PaginatedResponse(BaseModel, Generic[T]):
    """Generic page of results, newest first.

    The cursor is opaque to clients: pass ``next_cursor`` back unchanged to
    fetch the following page.
    """

    items: list[T]
    next_cursor: str | None = Field(
        default=None,
        description="Opaque cursor for fetching the next page. None if no more pages.",
    )
    has_more: bool = Field(
        default=False,
        description="Whether there are more items after this page.",
    )

    @classmethod
    def from_page(
        cls,
        page: tuple[Sequence[Any], str | None, bool],
        read_schema: type[BaseModel],
    ) -> "PaginatedResponse[Any]":
        """Build a response from a repository (items, next_cursor, has_more) tuple."""
        items, next_cursor, has_more = page
        return cls(
            items=[read_schema.model_validate(item) for item in items],
            next_cursor=next_cursor,
            has_more=has_more,
        )


def encode_cursor(value: str) -> str:
    """Encode a cursor value (timestamp or id) as URL-safe base64."""
    return base64.urlsafe_b64encode(value.encode()).decode()


def decode_cursor(cursor: str) -> str:
    """Decode a base64 cursor value.

    Raises:
        ValueError: If cursor is invalid
    """
    try:
        return base64.urlsafe_b64decode(cursor.encode()).decode()
    except Exception as e:
        raise ValueError("Invalid cursor") from e
