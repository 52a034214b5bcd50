"""Repositories for reports, scheduled reports and report data queries."""

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from src.crm.models.enums import ReportVisibility
from src.crm.models.public import Profile
from src.crm.models.tenant import Company, Report, ScheduledReport
from src.crm.repositories.base import BaseRepository, TenantScopedRepository


class ReportRepository(TenantScopedRepository[Report]):
    model = Report
    search_fields = ("name",)

    def _visible_to(self, user_id: UUID) -> Any:
        return self.scoped_query().where(
            Report.active == True,  # noqa: E712
            or_(
                Report.created_by == user_id,
                Report.visibility == ReportVisibility.TENANT.value,
            ),
        )

    async def get_visible(self, report_id: UUID, user_id: UUID) -> Report | None:
        """Private reports are visible to their creator only."""
        result = await self.session.execute(
            self._visible_to(user_id).where(Report.id == report_id)
        )
        return result.scalar_one_or_none()

    async def list_visible_page(
        self, user_id: UUID, cursor: str | None, limit: int
    ) -> tuple[list[Report], str | None, bool]:
        return await self.paginate(self._visible_to(user_id), cursor, limit, Report.created_at)


class ScheduledReportRepository(TenantScopedRepository[ScheduledReport]):
    model = ScheduledReport
    search_fields = ("name",)


class ScheduledReportQueueRepository(BaseRepository[ScheduledReport]):
    """Cross-tenant view used by the background runner only."""

    model = ScheduledReport

    async def list_due(self, now: datetime, limit: int = 100) -> list[ScheduledReport]:
        """Active schedules that never ran or whose next run is not in the future.

        Never-run schedules come first, then the longest overdue.
        """
        result = await self.session.execute(
            select(ScheduledReport)
            .where(
                ScheduledReport.is_active == True,  # noqa: E712
                or_(
                    ScheduledReport.next_run_at.is_(None),  # type: ignore[union-attr]
                    ScheduledReport.next_run_at <= now,  # type: ignore[operator]
                ),
            )
            .order_by(
                ScheduledReport.next_run_at.asc().nulls_first(),  # type: ignore[union-attr]
                ScheduledReport.created_at,
            )
            .limit(limit)
        )
        return list(result.scalars().all())


class ReportDataRepository:
    """Runs report queries against any tenant-scoped entity table."""

    def __init__(self, session: AsyncSession, tenant_id: UUID):
        self.session = session
        self.tenant_id = tenant_id

    async def fetch(
        self,
        model: type[SQLModel],
        conditions: list[Any],
        order_by: Any | None = None,
        limit: int | None = None,
    ) -> list[Any]:
        query = select(model).where(
            model.tenant_id == self.tenant_id,  # type: ignore[attr-defined]
            *conditions,
        )
        if hasattr(model, "deleted_at"):
            query = query.where(model.deleted_at.is_(None))  # type: ignore[attr-defined]
        if order_by is not None:
            query = query.order_by(order_by)
        if limit is not None:
            query = query.limit(limit)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def company_names(self, company_ids: set[UUID]) -> dict[UUID, str]:
        if not company_ids:
            return {}
        result = await self.session.execute(
            select(Company.id, Company.name).where(
                Company.tenant_id == self.tenant_id,
                Company.id.in_(company_ids),  # type: ignore[attr-defined]
            )
        )
        return {company_id: name for company_id, name in result.all()}

    async def profile_names(self, user_ids: set[UUID]) -> dict[UUID, str]:
        if not user_ids:
            return {}
        result = await self.session.execute(
            select(Profile).where(Profile.id.in_(user_ids))  # type: ignore[attr-defined]
        )
        return {profile.id: profile.display_name for profile in result.scalars().all()}
