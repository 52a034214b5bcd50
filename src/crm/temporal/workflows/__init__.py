"""Temporal Workflows - Re-exports for worker registration."""

from src.crm.temporal.workflows.cleanup import CleanupWorkflow
from src.crm.temporal.workflows.scheduled_reports import ScheduledReportsWorkflow

__all__ = [
    "CleanupWorkflow",
    "ScheduledReportsWorkflow",
]
