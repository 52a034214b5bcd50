"""Scheduled report activities."""

from dataclasses import dataclass

from temporalio import activity

from src.crm.core.db import get_session
from src.crm.services.scheduled_report_service import run_due_scheduled_reports


@dataclass
class RunDueReportsOutput:
    total: int
    succeeded: int
    failed: int
    emails_sent: int


@activity.defn
async def run_due_reports(limit: int) -> RunDueReportsOutput:
    """
    Run every active scheduled report that is due, across all tenants.

    A failing report is logged and skipped. next_run_at is only advanced for
    reports that ran, so a retry picks up the remaining ones.

    Args:
        limit: Maximum number of scheduled reports to run in one pass

    Returns:
        Counts of runs and emails sent
    """
    async with get_session() as session:
        results = await run_due_scheduled_reports(session, limit=limit)

    failed = [r for r in results if not r["success"]]
    for result in failed:
        activity.logger.warning(
            f"Scheduled report {result['scheduled_report_id']} failed: {result['error']}"
        )

    output = RunDueReportsOutput(
        total=len(results),
        succeeded=len(results) - len(failed),
        failed=len(failed),
        emails_sent=sum(r["emails_sent"] for r in results),
    )
    activity.logger.info(
        f"Ran {output.total} scheduled reports ({output.failed} failed, "
        f"{output.emails_sent} emails sent)"
    )
    return output
