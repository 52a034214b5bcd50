"""Base repositories with common CRUD operations."""

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from src.crm.schemas.pagination import decode_cursor, encode_cursor


class BaseRepository[ModelType: SQLModel]:
    """Base repository providing common database operations.

    Repositories handle data access only. Transaction control (commit)
    belongs to the service layer.
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, id: UUID) -> ModelType | None:
        """Get a record by its primary key (no tenant filter)."""
        result = await self.session.execute(
            select(self.model).where(self.model.id == id)  # type: ignore[attr-defined]
        )
        return result.scalar_one_or_none()

    def add(self, entity: ModelType) -> None:
        """Add entity to session (no flush/commit)."""
        self.session.add(entity)

    async def paginate(
        self,
        query: Any,
        cursor: str | None,
        limit: int,
        cursor_field: Any,
    ) -> tuple[list[ModelType], str | None, bool]:
        """Execute cursor-based pagination on a query, newest first.

        Args:
            query: The base query to paginate
            cursor: Optional cursor from previous page (base64-encoded)
            limit: Maximum number of items to return
            cursor_field: Column to order and cut on (datetime, UUID or scalar)

        Returns:
            Tuple of (items, next_cursor, has_more)
        """
        if cursor:
            try:
                cursor_str = decode_cursor(cursor)
                cursor_value: datetime | UUID | str
                try:
                    cursor_value = datetime.fromisoformat(cursor_str)
                except ValueError:
                    try:
                        cursor_value = UUID(cursor_str)
                    except ValueError:
                        cursor_value = cursor_str
                query = query.where(cursor_field < cursor_value)
            except (ValueError, TypeError):
                # Invalid cursor - start from the beginning
                pass

        query = query.order_by(cursor_field.desc()).limit(limit + 1)

        result = await self.session.execute(query)
        items = list(result.scalars().all())

        has_more = len(items) > limit
        if has_more:
            items = items[:limit]

        next_cursor = None
        if has_more and items:
            value = getattr(items[-1], cursor_field.key)
            if isinstance(value, datetime):
                next_cursor = encode_cursor(value.isoformat())
            elif value is not None:
                next_cursor = encode_cursor(str(value))

        return items, next_cursor, has_more


class TenantScopedRepository[ModelType: SQLModel](BaseRepository[ModelType]):
    """Repository whose every read is filtered by tenant_id.

    Soft-deleted rows (deleted_at set) are invisible through this class.
    A row of another tenant is indistinguishable from a missing row.
    """

    search_fields: tuple[str, ...] = ()

    def __init__(self, session: AsyncSession, tenant_id: UUID):
        super().__init__(session)
        self.tenant_id = tenant_id

    def scoped_query(self) -> Any:
        """Base select for this tenant, excluding soft-deleted rows."""
        query = select(self.model).where(
            self.model.tenant_id == self.tenant_id  # type: ignore[attr-defined]
        )
        if hasattr(self.model, "deleted_at"):
            query = query.where(self.model.deleted_at.is_(None))  # type: ignore[attr-defined]
        return query

    def _search_clause(self, search: str) -> Any:
        pattern = f"%{search.strip()}%"
        return or_(
            *(getattr(self.model, field).ilike(pattern) for field in self.search_fields)
        )

    async def get(self, id: UUID) -> ModelType | None:
        """Get a visible row of this tenant by id."""
        result = await self.session.execute(
            self.scoped_query().where(self.model.id == id)  # type: ignore[attr-defined]
        )
        return result.scalar_one_or_none()

    async def list_page(
        self,
        cursor: str | None,
        limit: int,
        search: str | None = None,
        **filters: Any,
    ) -> tuple[list[ModelType], str | None, bool]:
        """Paginated list, newest first, with optional search and equality filters.

        Filters whose value is None are ignored.
        """
        query = self.scoped_query()
        if search and search.strip() and self.search_fields:
            query = query.where(self._search_clause(search))
        for field, value in filters.items():
            if value is not None:
                query = query.where(getattr(self.model, field) == value)
        return await self.paginate(
            query, cursor, limit, self.model.created_at  # type: ignore[attr-defined]
        )

    async def count(self, *conditions: Any) -> int:
        """Count visible rows of this tenant matching extra conditions."""
        query = select(func.count()).select_from(self.model).where(
            self.model.tenant_id == self.tenant_id,  # type: ignore[attr-defined]
            *conditions,
        )
        if hasattr(self.model, "deleted_at"):
            query = query.where(self.model.deleted_at.is_(None))  # type: ignore[attr-defined]
        result = await self.session.execute(query)
        return int(result.scalar_one())
