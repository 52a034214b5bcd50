"""Device catalog import/sync and device templates."""

from uuid import UUID

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from src.crm.core.exceptions import ConflictError, NotFoundError, PermissionDeniedError
from src.crm.core.logging import get_logger
from src.crm.models.base import utc_now
from src.crm.models.enums import TemplateImportStatus
from src.crm.models.tenant import Device, DeviceTemplate
from src.crm.repositories import DeviceRepository, DeviceTemplateRepository
from src.crm.services.entity_service import EntityService

logger = get_logger(__name__)

# Fields copied from a catalog device on import and on every sync.
SYNC_FIELDS = (
    "name",
    "category",
    "brand",
    "model",
    "unit_price",
    "cost_price",
    "msrp",
    "specifications",
    "template_properties",
    "image_url",
    "sync_version",
    "active",
)

IMPORTED_NAME_SUFFIX = " (Imported)"


def needs_update(device: Device, source: Device | None) -> bool:
    return source is not None and source.sync_version != device.sync_version


def copy_sync_fields(target: Device, source: Device) -> None:
    for field in SYNC_FIELDS:
        value = getattr(source, field)
        if isinstance(value, dict):
            value = dict(value)
        setattr(target, field, value)
    now = utc_now()
    target.last_synced_at = now
    target.updated_at = now


class DeviceService(EntityService[Device]):
    """Tenant devices plus import and sync from the global catalog."""

    def __init__(self, device_repo: DeviceRepository, session: AsyncSession):
        super().__init__(device_repo, session, "Device")
        self.device_repo = device_repo

    async def list_catalog(
        self, cursor: str | None, limit: int, search: str | None = None
    ) -> tuple[list[Device], str | None, bool]:
        return await self.device_repo.list_global_page(cursor, limit, search)

    async def import_device(self, source_id: UUID) -> Device:
        """Copy a global catalog device into this tenant.

        Raises:
            NotFoundError: No active global catalog device has this id.
            ConflictError: Already imported by this tenant.
        """
        source = await self.device_repo.get_global(source_id)
        if source is None or not source.active:
            raise NotFoundError("Catalog device not found")
        if await self.device_repo.get_imported(source.id) is not None:
            raise ConflictError("Device already imported")

        try:
            device = Device(
                tenant_id=self.tenant_id,
                name=source.name,
                category=source.category,
                is_global=False,
                source_device_id=source.id,
            )
            copy_sync_fields(device, source)
            self.device_repo.add(device)
            await self.session.commit()
            await self.session.refresh(device)
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to import device", source_id=str(source_id), error=str(e))
            raise

        logger.info("Device imported", device_id=str(device.id), source_id=str(source_id))
        return device

    async def sync_device(self, device_id: UUID) -> Device:
        """Pull catalog changes into one imported device when versions differ."""
        device = await self.get(device_id)
        if device.source_device_id is None:
            raise ValueError("Device is not linked to a catalog device")
        source = await self.device_repo.get_by_id(device.source_device_id)
        if source is None or source.is_deleted:
            raise NotFoundError("Catalog device not found")

        if not needs_update(device, source):
            return device

        try:
            copy_sync_fields(device, source)
            self.session.add(device)
            await self.session.commit()
            await self.session.refresh(device)
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Device synced", device_id=str(device_id), sync_version=device.sync_version)
        return device

    async def bulk_sync(self) -> int:
        """Sync every imported device whose catalog source has a newer version.

        Returns:
            Number of devices updated.
        """
        updated = 0
        try:
            for device, source in await self.device_repo.list_linked():
                if source.sync_version > device.sync_version:
                    copy_sync_fields(device, source)
                    self.session.add(device)
                    updated += 1
            await self.session.commit()
        except Exception as e:
            await self.session.rollback()
            logger.error("Bulk device sync failed", error=str(e))
            raise

        logger.info("Bulk device sync finished", updated=updated)
        return updated

    async def sync_status(self) -> list[tuple[Device, Device]]:
        """Imported devices with their catalog source, for needs_update display."""
        return await self.device_repo.list_linked()


class DeviceTemplateService:
    """Tenant templates are editable; global templates are read-only and importable."""

    def __init__(self, template_repo: DeviceTemplateRepository, session: AsyncSession):
        self.template_repo = template_repo
        self.session = session
        self.tenant_id = template_repo.tenant_id

    async def list_page(
        self, cursor: str | None, limit: int, search: str | None = None
    ) -> tuple[list[DeviceTemplate], str | None, bool]:
        return await self.template_repo.list_visible_page(cursor, limit, search)

    async def get(self, template_id: UUID) -> DeviceTemplate:
        template = await self.template_repo.get_visible(template_id)
        if template is None:
            raise NotFoundError("Device template not found")
        return template

    async def _get_owned(self, template_id: UUID) -> DeviceTemplate:
        template = await self.get(template_id)
        if template.tenant_id != self.tenant_id:
            raise PermissionDeniedError("Global templates are read-only")
        return template

    async def create(self, data: BaseModel, user_id: UUID) -> DeviceTemplate:
        try:
            template = DeviceTemplate(
                tenant_id=self.tenant_id,
                created_by=user_id,
                **data.model_dump(),
            )
            self.template_repo.add(template)
            await self.session.commit()
            await self.session.refresh(template)
            return template
        except Exception:
            await self.session.rollback()
            raise

    async def update(self, template_id: UUID, data: BaseModel) -> DeviceTemplate:
        template = await self._get_owned(template_id)
        try:
            for field, value in data.model_dump(exclude_unset=True).items():
                setattr(template, field, value)
            template.sync_version += 1
            template.updated_at = utc_now()
            self.session.add(template)
            await self.session.commit()
            await self.session.refresh(template)
            return template
        except Exception:
            await self.session.rollback()
            raise

    async def delete(self, template_id: UUID) -> None:
        """Deactivate; devices may still reference the template."""
        template = await self._get_owned(template_id)
        try:
            template.active = False
            template.updated_at = utc_now()
            self.session.add(template)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

    async def import_template(self, template_id: UUID, user_id: UUID) -> DeviceTemplate:
        """Copy a global template into this tenant.

        A name already used by a tenant template gets the " (Imported)" suffix.
        """
        source = await self.template_repo.get_global(template_id)
        if source is None:
            raise NotFoundError("Global device template not found")

        name = source.name
        if await self.template_repo.name_exists(name):
            name = f"{name}{IMPORTED_NAME_SUFFIX}"

        try:
            template = DeviceTemplate(
                tenant_id=self.tenant_id,
                name=name,
                category=source.category,
                description=source.description,
                properties_schema=dict(source.properties_schema or {}),
                is_global=False,
                source_template_id=source.id,
                import_status=TemplateImportStatus.IMPORTED.value,
                template_version=source.template_version,
                sync_version=source.template_version or 1,
                created_by=user_id,
            )
            self.template_repo.add(template)
            await self.session.commit()
            await self.session.refresh(template)
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to import template", template_id=str(template_id), error=str(e))
            raise

        logger.info("Device template imported", template_id=str(template.id), name=name)
        return template
