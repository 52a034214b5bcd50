"""
Cleanup Workflow.

Purge expired invitations and stale recovery-email tokens. Designed to run on
a schedule (e.g., daily at 3am UTC via Temporal cron).

Idempotent: both activities only delete or clear rows past a cutoff.
"""

from datetime import timedelta

from temporalio import workflow
from temporalio.common import RetryPolicy

with workflow.unsafe.imports_passed_through():
    from src.crm.temporal.activities import (
        cleanup_expired_invitations,
        cleanup_recovery_email_tokens,
    )

CLEANUP_RETRY = RetryPolicy(maximum_attempts=3, initial_interval=timedelta(seconds=2))


@workflow.defn
class CleanupWorkflow:
    """Purge expired invitations and recovery-email tokens."""

    @workflow.run
    async def run(self, retention_days: int = 30) -> dict[str, int]:
        """
        Run both cleanup activities in parallel.

        Args:
            retention_days: Number of days to keep finished invitations

        Returns:
            {"invitations": int, "recovery_tokens": int, "total": int}
        """
        workflow.logger.info(f"Starting cleanup (retention: {retention_days} days)")

        invitations_task = workflow.start_activity(
            cleanup_expired_invitations,
            retention_days,
            start_to_close_timeout=timedelta(minutes=5),
            retry_policy=CLEANUP_RETRY,
        )
        tokens_task = workflow.start_activity(
            cleanup_recovery_email_tokens,
            start_to_close_timeout=timedelta(minutes=5),
            retry_policy=CLEANUP_RETRY,
        )

        invitations = await invitations_task
        tokens = await tokens_task

        result = {
            "invitations": invitations,
            "recovery_tokens": tokens,
            "total": invitations + tokens,
        }
        workflow.logger.info(
            f"Cleanup complete: {invitations} invitations, {tokens} recovery tokens"
        )
        return result
