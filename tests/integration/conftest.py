"""Integration test fixtures for database and HTTP client operations.

Runs the app against an in-memory SQLite database (aiosqlite) shared by the
test session and the app through a StaticPool. Temporal is always reported
unavailable, so background work falls back to running in-process.
"""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from src.crm.core import redis as redis_core
from src.crm.core.db import create_all
from src.crm.core.health import reset_health_cache
from src.crm.main import create_app
from src.crm.models.enums import MembershipRole
from src.crm.models.public import Profile, Tenant
from tests.factories import TenantFactory
from tests.helpers import create_user_with_membership


@pytest.fixture(autouse=True)
async def _reset_shared_state() -> AsyncGenerator[None]:
    """Redis clients and the health cache must not leak between tests."""
    redis_core.reset_redis_state()
    reset_health_cache()
    yield
    await redis_core.close_redis()
    reset_health_cache()


@pytest.fixture(autouse=True)
def temporal_unavailable(monkeypatch: pytest.MonkeyPatch) -> None:
    """Make every Temporal connection attempt fail fast."""

    async def _no_temporal():
        raise RuntimeError("Temporal unavailable in tests")

    monkeypatch.setattr("src.crm.core.health.get_temporal_client", _no_temporal)
    monkeypatch.setattr(
        "src.crm.services.scheduled_report_service.get_temporal_client", _no_temporal
    )


@pytest.fixture
async def engine(monkeypatch: pytest.MonkeyPatch) -> AsyncGenerator[AsyncEngine]:
    """Fresh in-memory database with every table, used by the app as well."""
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all(test_engine)
    monkeypatch.setattr("src.crm.core.db.engine._engine", test_engine)

    yield test_engine
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Provide an async session for arranging and checking data.

    The session does NOT auto-commit: commit before calling the API.
    """
    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session


@pytest.fixture
async def tenant(db_session: AsyncSession) -> Tenant:
    tenant = TenantFactory.build()
    db_session.add(tenant)
    await db_session.commit()
    return tenant


@pytest.fixture
async def other_tenant(db_session: AsyncSession) -> Tenant:
    tenant = TenantFactory.build()
    db_session.add(tenant)
    await db_session.commit()
    return tenant


@pytest.fixture
async def admin(db_session: AsyncSession, tenant: Tenant) -> Profile:
    """Profile with an admin membership in ``tenant``."""
    profile, _ = await create_user_with_membership(
        db_session, tenant, MembershipRole.ADMIN, first_name="Alice", last_name="Admin"
    )
    return profile


@pytest.fixture
async def member(db_session: AsyncSession, tenant: Tenant) -> Profile:
    """Profile with a plain member membership in ``tenant``."""
    profile, _ = await create_user_with_membership(
        db_session, tenant, MembershipRole.MEMBER, first_name="Bob", last_name="Member"
    )
    return profile


@pytest.fixture
async def client(engine: AsyncEngine) -> AsyncGenerator[AsyncClient]:
    """HTTP client for the app; pass auth headers per request."""
    app = create_app()
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
