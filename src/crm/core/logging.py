"""Logging configuration using structlog."""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from uuid import UUID

import structlog
from structlog.contextvars import bind_contextvars, bound_contextvars, clear_contextvars


def setup_logging(debug: bool = False) -> None:
    """Configure structlog for structured logging.

    Args:
        debug: If True, use colored console output. If False, emit JSON lines.
    """
    log_level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )

    shared_processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if debug:
        processors = shared_processors + [structlog.dev.ConsoleRenderer(colors=True)]
    else:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Quieten chatty libraries
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("temporalio").setLevel(logging.INFO)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger instance."""
    return structlog.get_logger(name)


def bind_request_context(
    request_id: str | None, method: str | None = None, path: str | None = None
) -> None:
    """Bind the correlation ID, method and path to all log calls of this request."""
    if request_id:
        bind_contextvars(request_id=request_id)
    if method and path:
        bind_contextvars(method=method, path=path)


def bind_user_context(user_id: UUID, tenant_id: UUID | None = None, email: str | None = None) -> None:
    """Bind user and tenant to all subsequent log calls.

    Args:
        user_id: The authenticated user's ID.
        tenant_id: The tenant resolved from the X-Tenant-ID header, if any.
        email: Only logged if settings.log_user_emails is True (GDPR).
    """
    from src.crm.core.config import get_settings

    bind_contextvars(user_id=str(user_id))
    if tenant_id is not None:
        bind_contextvars(tenant_id=str(tenant_id))

    if email and get_settings().log_user_emails:
        bind_contextvars(user_email=email)


def clear_request_context() -> None:
    """Clear all request-scoped context."""
    clear_contextvars()


@contextmanager
def job_context(job: str, tenant_id: UUID | None = None, **ids: UUID) -> Iterator[None]:
    """Bind a background job and the rows it touches for the duration of a block.

    Background sweeps run outside of any request, so no middleware binds
    context for them. Keys bound here are removed again on exit.
    """
    fields = {"job": job, **{key: str(value) for key, value in ids.items()}}
    if tenant_id is not None:
        fields["tenant_id"] = str(tenant_id)
    with bound_contextvars(**fields):
        yield
