"""Scheduled reports: CRUD, immediate runs and the background due-run sweep."""

import asyncio
from datetime import datetime, timedelta
from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from src.crm.core.config import get_settings
from src.crm.core.exceptions import NotFoundError
from src.crm.core.logging import get_logger, job_context
from src.crm.core.notifications import send_scheduled_report_email
from src.crm.models.base import utc_now
from src.crm.models.enums import ScheduleType
from src.crm.models.tenant import ScheduledReport
from src.crm.repositories import (
    ReportDataRepository,
    ReportRepository,
    ScheduledReportQueueRepository,
    ScheduledReportRepository,
)
from src.crm.schemas.report import QueryConfig
from src.crm.services.report_service import ReportService, render_table, report_fields
from src.crm.services.reward_service import add_months
from src.crm.temporal.client import get_temporal_client

logger = get_logger(__name__)


def compute_next_run(schedule_type: str, now: datetime) -> datetime:
    """Next run time: +1 day, +7 days or +1 calendar month; unknown types run daily."""
    if schedule_type == ScheduleType.WEEKLY.value:
        return now + timedelta(days=7)
    if schedule_type == ScheduleType.MONTHLY.value:
        return add_months(now, 1)
    return now + timedelta(days=1)


def render_report_email_body(rows: list[dict[str, Any]], fields: list[str], limit: int) -> str:
    """Table of the first ``limit`` rows, plus a note when rows were cut."""
    body = render_table(rows[:limit], fields)
    if len(rows) > limit:
        body += (
            '<p style="margin-top: 10px; color: #666; font-size: 12px;">'
            f"Showing first {limit} rows of {len(rows)} total records.</p>"
        )
    return body


class ScheduledReportService:
    def __init__(
        self,
        scheduled_repo: ScheduledReportRepository,
        report_service: ReportService,
        session: AsyncSession,
    ):
        self.scheduled_repo = scheduled_repo
        self.report_service = report_service
        self.session = session
        self.tenant_id = scheduled_repo.tenant_id

    async def list_page(
        self, cursor: str | None, limit: int
    ) -> tuple[list[ScheduledReport], str | None, bool]:
        return await self.scheduled_repo.list_page(cursor, limit)

    async def get(self, scheduled_id: UUID) -> ScheduledReport:
        scheduled = await self.scheduled_repo.get(scheduled_id)
        if scheduled is None:
            raise NotFoundError("Scheduled report not found")
        return scheduled

    async def create(self, data: BaseModel, user_id: UUID) -> ScheduledReport:
        values = data.model_dump()
        # Only reports visible to the user can be scheduled.
        await self.report_service.get(values["report_id"], user_id)
        try:
            scheduled = ScheduledReport(tenant_id=self.tenant_id, user_id=user_id, **values)
            self.scheduled_repo.add(scheduled)
            await self.session.commit()
            await self.session.refresh(scheduled)
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to create scheduled report", error=str(e))
            raise
        logger.info("Scheduled report created", scheduled_report_id=str(scheduled.id))
        return scheduled

    async def update(self, scheduled_id: UUID, data: BaseModel) -> ScheduledReport:
        scheduled = await self.get(scheduled_id)
        try:
            for field, value in data.model_dump(exclude_unset=True).items():
                setattr(scheduled, field, value)
            scheduled.updated_at = utc_now()
            self.session.add(scheduled)
            await self.session.commit()
            await self.session.refresh(scheduled)
            return scheduled
        except Exception:
            await self.session.rollback()
            raise

    async def delete(self, scheduled_id: UUID) -> None:
        scheduled = await self.get(scheduled_id)
        try:
            await self.session.delete(scheduled)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

    async def toggle(self, scheduled_id: UUID) -> ScheduledReport:
        scheduled = await self.get(scheduled_id)
        try:
            scheduled.is_active = not scheduled.is_active
            scheduled.updated_at = utc_now()
            self.session.add(scheduled)
            await self.session.commit()
            await self.session.refresh(scheduled)
        except Exception:
            await self.session.rollback()
            raise
        logger.info(
            "Scheduled report toggled",
            scheduled_report_id=str(scheduled_id),
            is_active=scheduled.is_active,
        )
        return scheduled

    async def run_now(self, scheduled_id: UUID) -> dict[str, Any]:
        return await self.run(await self.get(scheduled_id))

    async def run(self, scheduled: ScheduledReport) -> dict[str, Any]:
        """Generate the report, email every recipient and advance the schedule.

        Returns:
            {"scheduled_report_id", "success", "emails_sent", "row_count", "error"}
        """
        report = await self.report_service.report_repo.get(scheduled.report_id)
        if report is None or not report.active:
            raise NotFoundError("Report not found")

        config = QueryConfig.model_validate(report.query_config or {})
        result = await self.report_service.generate(report.data_source, config)
        rows = result["data"]
        body = render_report_email_body(
            rows, report_fields(rows, config), get_settings().scheduled_report_preview_rows
        )

        emails_sent = 0
        for recipient in scheduled.email_recipients:
            sent = await asyncio.to_thread(
                send_scheduled_report_email, recipient, scheduled.name, body
            )
            if sent:
                emails_sent += 1
            else:
                logger.warning(
                    "Scheduled report email failed",
                    scheduled_report_id=str(scheduled.id),
                    recipient=recipient,
                )

        scheduled_id = scheduled.id
        try:
            now = utc_now()
            scheduled.last_run_at = now
            scheduled.next_run_at = compute_next_run(scheduled.schedule_type, now)
            scheduled.updated_at = now
            self.session.add(scheduled)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info(
            "Scheduled report run",
            scheduled_report_id=str(scheduled_id),
            rows=len(rows),
            emails_sent=emails_sent,
        )
        return {
            "scheduled_report_id": scheduled_id,
            "success": True,
            "emails_sent": emails_sent,
            "row_count": len(rows),
            "error": None,
        }


def scheduled_report_service_for(session: AsyncSession, tenant_id: UUID) -> ScheduledReportService:
    """Wire a ScheduledReportService for one tenant outside of a request."""
    report_service = ReportService(
        ReportRepository(session, tenant_id),
        ReportDataRepository(session, tenant_id),
        session,
    )
    return ScheduledReportService(
        ScheduledReportRepository(session, tenant_id), report_service, session
    )


async def run_due_scheduled_reports(
    session: AsyncSession, now: datetime | None = None, limit: int = 100
) -> list[dict[str, Any]]:
    """Run every active schedule whose next_run_at is unset or not in the future.

    One failing schedule is recorded, moved to its next slot, and the sweep
    continues.
    """
    now = now or utc_now()
    due = await ScheduledReportQueueRepository(session).list_due(now, limit)
    logger.info("Running due scheduled reports", count=len(due))

    # A rollback expires loaded rows, so each schedule is re-read by id.
    targets = [(scheduled.id, scheduled.tenant_id) for scheduled in due]
    results: list[dict[str, Any]] = []
    for scheduled_id, tenant_id in targets:
        with job_context("scheduled_report", tenant_id, scheduled_report_id=scheduled_id):
            try:
                scheduled = await session.get(ScheduledReport, scheduled_id)
                if scheduled is None:
                    continue
                service = scheduled_report_service_for(session, tenant_id)
                results.append(await service.run(scheduled))
            except Exception as e:
                await session.rollback()
                logger.error("Scheduled report run failed", error=str(e))
                await defer_failed_run(session, scheduled_id)
                results.append(
                    {
                        "scheduled_report_id": scheduled_id,
                        "success": False,
                        "emails_sent": 0,
                        "row_count": 0,
                        "error": str(e),
                    }
                )
    return results


async def defer_failed_run(session: AsyncSession, scheduled_id: UUID) -> None:
    """Advance next_run_at of a failed schedule so it leaves the due queue.

    last_run_at keeps the time of the last successful run.
    """
    scheduled = await session.get(ScheduledReport, scheduled_id)
    if scheduled is None:
        return
    try:
        now = utc_now()
        scheduled.next_run_at = compute_next_run(scheduled.schedule_type, now)
        scheduled.updated_at = now
        session.add(scheduled)
        await session.commit()
    except Exception as e:
        await session.rollback()
        logger.error("Failed to defer scheduled report", error=str(e))


async def trigger_due_run(session: AsyncSession) -> dict[str, Any]:
    """Hand a due-reports pass to the worker, or run it here if Temporal is down.

    Returns:
        {"dispatched", "workflow_id", "results"}
    """
    settings = get_settings()
    workflow_id = f"scheduled-reports-manual-{uuid4()}"
    try:
        client = await get_temporal_client()
        # Started by name: the workflow module imports this service.
        await client.start_workflow(
            "ScheduledReportsWorkflow",
            100,
            id=workflow_id,
            task_queue=settings.temporal_task_queue,
        )
    except Exception as e:
        logger.warning(
            "Temporal unavailable, running due scheduled reports in-process", error=str(e)
        )
        return {
            "dispatched": False,
            "workflow_id": None,
            "results": await run_due_scheduled_reports(session),
        }

    logger.info("Due scheduled reports dispatched", workflow_id=workflow_id)
    return {"dispatched": True, "workflow_id": workflow_id, "results": []}
