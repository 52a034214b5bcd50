"""
Scheduled Reports Workflow.

Run every scheduled report that is due and email it to its recipients.
Started on a cron schedule by the worker, or once on demand from the API.
"""

from datetime import timedelta

from temporalio import workflow
from temporalio.common import RetryPolicy

with workflow.unsafe.imports_passed_through():
    from src.crm.temporal.activities import RunDueReportsOutput, run_due_reports


@workflow.defn
class ScheduledReportsWorkflow:
    @workflow.run
    async def run(self, limit: int = 100) -> RunDueReportsOutput:
        """
        Args:
            limit: Maximum number of scheduled reports to run in this pass

        Returns:
            Counts of runs and emails sent
        """
        result: RunDueReportsOutput = await workflow.execute_activity(
            run_due_reports,
            limit,
            start_to_close_timeout=timedelta(minutes=5),
            retry_policy=RetryPolicy(
                maximum_attempts=3,
                initial_interval=timedelta(seconds=2),
            ),
        )
        workflow.logger.info(
            f"Scheduled reports pass complete: {result.succeeded}/{result.total} succeeded"
        )
        return result
