"""
Temporal Worker - Separate process from API.

Run with:
    python -m src.crm.temporal.worker                  # Worker only
    python -m src.crm.temporal.worker --schedule       # Also register the cron workflows
"""

import argparse
import asyncio
from collections.abc import Sequence

import uvicorn
from fastapi import FastAPI
from temporalio.client import Client
from temporalio.exceptions import WorkflowAlreadyStartedError
from temporalio.worker import Worker

from src.crm.core.config import get_settings
from src.crm.core.db import dispose_engine
from src.crm.core.logging import get_logger, setup_logging
from src.crm.temporal.activities import (
    cleanup_expired_invitations,
    cleanup_recovery_email_tokens,
    run_due_reports,
)
from src.crm.temporal.workflows import CleanupWorkflow, ScheduledReportsWorkflow

logger = get_logger(__name__)

WORKER_HEALTH_PORT = 8001
SCHEDULED_REPORTS_CRON_ID = "scheduled-reports-cron"
CLEANUP_CRON_ID = "cleanup-cron"


def parse_args() -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(description="Temporal worker")
    parser.add_argument(
        "--schedule",
        action="store_true",
        help="Start the cron workflows configured in settings (idempotent)",
    )
    return parser.parse_args()


async def create_worker(
    client: Client,
    task_queue: str,
    workflows: Sequence[type],
    activities: Sequence[object],  # type: ignore[type-arg]
    *,
    max_concurrent_activities: int = 50,
    max_concurrent_workflow_tasks: int = 50,
) -> Worker:
    """Create a worker with tuned settings.

    Args:
        client: Temporal client
        task_queue: Task queue name
        workflows: List of workflow classes
        activities: List of activity functions
        max_concurrent_activities: Max concurrent activity executions
        max_concurrent_workflow_tasks: Max concurrent workflow task executions

    Returns:
        Configured Worker instance
    """
    return Worker(
        client,
        task_queue=task_queue,
        workflows=list(workflows),
        activities=list(activities),  # type: ignore[arg-type]
        max_concurrent_activities=max_concurrent_activities,
        max_concurrent_workflow_tasks=max_concurrent_workflow_tasks,
    )


async def start_cron_workflows(client: Client) -> None:
    """Register the cron workflows configured in settings.

    A cron workflow that is already running is left as it is.
    """
    settings = get_settings()
    crons = [
        (
            ScheduledReportsWorkflow.run,
            100,
            SCHEDULED_REPORTS_CRON_ID,
            settings.scheduled_reports_schedule,
        ),
        (
            CleanupWorkflow.run,
            settings.cleanup_retention_days,
            CLEANUP_CRON_ID,
            settings.cleanup_schedule,
        ),
    ]
    for run, arg, workflow_id, schedule in crons:
        if not schedule:
            continue
        try:
            await client.start_workflow(
                run,  # type: ignore[arg-type]
                arg,
                id=workflow_id,
                task_queue=settings.temporal_task_queue,
                cron_schedule=schedule,
            )
            logger.info("Cron workflow started", workflow_id=workflow_id, schedule=schedule)
        except WorkflowAlreadyStartedError:
            logger.info("Cron workflow already running", workflow_id=workflow_id)


async def run_health_server(task_queue: str, port: int = WORKER_HEALTH_PORT) -> None:
    """Run a lightweight health server for K8s probes.

    Args:
        task_queue: Task queue being polled
        port: Port to listen on
    """
    health_app = FastAPI(title="Temporal Worker Health")

    @health_app.get("/health")
    async def health() -> dict[str, str]:
        return {
            "status": "healthy",
            "service": "temporal-worker",
            "task_queue": task_queue,
        }

    @health_app.get("/ready")
    async def ready() -> dict[str, str]:
        return {"status": "ready"}

    config = uvicorn.Config(
        health_app,
        host="0.0.0.0",
        port=port,
        log_level="warning",
    )
    server = uvicorn.Server(config)
    logger.info(f"Starting health server on port {port}")
    await server.serve()


async def main() -> None:
    """Main entry point for the Temporal worker."""
    args = parse_args()
    settings = get_settings()
    setup_logging(settings.debug)

    client = await Client.connect(
        settings.temporal_host,
        namespace=settings.temporal_namespace,
    )

    worker = await create_worker(
        client,
        settings.temporal_task_queue,
        workflows=[ScheduledReportsWorkflow, CleanupWorkflow],
        activities=[
            cleanup_expired_invitations,
            cleanup_recovery_email_tokens,
            run_due_reports,
        ],
    )

    if args.schedule:
        await start_cron_workflows(client)

    logger.info(f"Polling task queue: {settings.temporal_task_queue}")

    try:
        health_task = asyncio.create_task(run_health_server(settings.temporal_task_queue))
        await worker.run()
        await health_task
    finally:
        await dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())
