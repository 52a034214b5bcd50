"""Repositories for the device catalog and device templates."""

from typing import Any
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.orm import aliased
from sqlmodel import select

from src.crm.models.tenant import Device, DeviceTemplate
from src.crm.repositories.base import TenantScopedRepository


class DeviceRepository(TenantScopedRepository[Device]):
    """Tenant devices through the scoped API, the global catalog through *_global methods."""

    model = Device
    search_fields = ("name", "brand", "model")

    def _global_query(self) -> Any:
        return select(Device).where(
            Device.is_global == True,  # noqa: E712
            Device.tenant_id.is_(None),  # type: ignore[union-attr]
            Device.deleted_at.is_(None),  # type: ignore[union-attr]
        )

    async def get_global(self, device_id: UUID) -> Device | None:
        result = await self.session.execute(self._global_query().where(Device.id == device_id))
        return result.scalar_one_or_none()

    async def list_global_page(
        self, cursor: str | None, limit: int, search: str | None = None
    ) -> tuple[list[Device], str | None, bool]:
        query = self._global_query()
        if search and search.strip():
            query = query.where(self._search_clause(search))
        return await self.paginate(query, cursor, limit, Device.created_at)

    async def get_imported(self, source_device_id: UUID) -> Device | None:
        """This tenant's copy of a catalog device, if already imported."""
        result = await self.session.execute(
            self.scoped_query().where(Device.source_device_id == source_device_id)
        )
        return result.scalars().first()

    async def list_linked(self) -> list[tuple[Device, Device]]:
        """Imported devices of this tenant with their live catalog source."""
        source = aliased(Device)
        result = await self.session.execute(
            select(Device, source)
            .join(source, source.id == Device.source_device_id)
            .where(
                Device.tenant_id == self.tenant_id,
                Device.deleted_at.is_(None),  # type: ignore[union-attr]
                source.deleted_at.is_(None),  # type: ignore[union-attr]
            )
            .order_by(Device.name)
        )
        return [(device, src) for device, src in result.all()]


class DeviceTemplateRepository(TenantScopedRepository[DeviceTemplate]):
    """Tenant templates are writable; global templates are visible to every tenant."""

    model = DeviceTemplate
    search_fields = ("name", "category")

    def _visible_query(self) -> Any:
        return select(DeviceTemplate).where(
            DeviceTemplate.active == True,  # noqa: E712
            or_(
                DeviceTemplate.tenant_id == self.tenant_id,
                DeviceTemplate.is_global == True,  # noqa: E712
            ),
        )

    async def get_visible(self, template_id: UUID) -> DeviceTemplate | None:
        result = await self.session.execute(
            self._visible_query().where(DeviceTemplate.id == template_id)
        )
        return result.scalar_one_or_none()

    async def get_global(self, template_id: UUID) -> DeviceTemplate | None:
        result = await self.session.execute(
            select(DeviceTemplate).where(
                DeviceTemplate.id == template_id,
                DeviceTemplate.is_global == True,  # noqa: E712
                DeviceTemplate.active == True,  # noqa: E712
            )
        )
        return result.scalar_one_or_none()

    async def list_visible_page(
        self, cursor: str | None, limit: int, search: str | None = None
    ) -> tuple[list[DeviceTemplate], str | None, bool]:
        query = self._visible_query()
        if search and search.strip():
            query = query.where(self._search_clause(search))
        return await self.paginate(query, cursor, limit, DeviceTemplate.created_at)

    async def name_exists(self, name: str) -> bool:
        result = await self.session.execute(
            self.scoped_query().where(DeviceTemplate.name == name)
        )
        return result.scalars().first() is not None
