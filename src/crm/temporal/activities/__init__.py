"""
Temporal Activities - Fine-grained, idempotent operations.

Activities should be:
1. Idempotent - Safe to retry
2. Fine-grained - Do one thing well
3. Side-effect aware - External calls go here, not in workflows
"""

from src.crm.temporal.activities.cleanup import (
    cleanup_expired_invitations,
    cleanup_recovery_email_tokens,
)
from src.crm.temporal.activities.reports import RunDueReportsOutput, run_due_reports

__all__ = [
    # Dataclasses
    "RunDueReportsOutput",
    # Activities
    "cleanup_expired_invitations",
    "cleanup_recovery_email_tokens",
    "run_due_reports",
]
