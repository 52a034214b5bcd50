from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.crm.api.middlewares import setup_middlewares
from src.crm.api.v1.router import api_router
from src.crm.core.config import get_settings
from src.crm.core.db import create_all, dispose_engine
from src.crm.core.exceptions import setup_exception_handlers
from src.crm.core.health import setup_health_endpoint, setup_metrics
from src.crm.core.logging import get_logger, setup_logging
from src.crm.core.rate_limit import limiter
from src.crm.core.redis import close_redis
from src.crm.temporal.client import close_temporal_client

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown."""
    settings = get_settings()
    setup_logging(settings.debug)
    logger.info("Starting application", app_name=settings.app_name, env=settings.app_env)

    if settings.database_create_tables:
        await create_all()
        logger.info("Database tables created")

    yield

    logger.info("Closing connections...")
    await close_redis()
    await close_temporal_client()
    await dispose_engine()
    logger.info("Shutdown complete")


OPENAPI_TAGS = [
    {"name": "tenants", "description": "Tenant creation and the caller's memberships"},
    {"name": "profile", "description": "Profile and recovery email"},
    {"name": "invitations", "description": "Tenant invitations"},
    {"name": "dashboard", "description": "Per-tenant summary counters"},
    {"name": "contacts", "description": "Contacts"},
    {"name": "companies", "description": "Companies"},
    {"name": "deals", "description": "Deal pipeline"},
    {"name": "contracts", "description": "Contracts"},
    {"name": "quotes", "description": "Quotes"},
    {"name": "todos", "description": "Tasks"},
    {"name": "notifications", "description": "In-app notifications and preferences"},
    {"name": "rewards", "description": "Reward points, cycles and configuration"},
    {"name": "devices", "description": "Devices and the shared device catalog"},
    {"name": "device-templates", "description": "Tenant device templates"},
    {"name": "reports", "description": "Saved reports and report generation"},
    {"name": "scheduled-reports", "description": "Emailed report schedules"},
    {"name": "health", "description": "Liveness and dependency checks"},
]


def create_app() -> FastAPI:
    settings = get_settings()
    docs_enabled = settings.enable_openapi

    app = FastAPI(
        title=settings.app_name,
        description="Multi-tenant CRM API",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
    )

    setup_exception_handlers(app)
    app.state.limiter = limiter
    setup_middlewares(app, settings)

    app.include_router(api_router)
    setup_health_endpoint(app)
    setup_metrics(app)

    return app


app = create_app()
