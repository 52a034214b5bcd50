"""Dashboard endpoint."""

from fastapi import APIRouter

from src.crm.api.dependencies import CurrentUser, DashboardServiceDep
from src.crm.schemas.dashboard import DashboardSummary

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get(
    "/summary",
    response_model=DashboardSummary,
    summary="Dashboard summary",
    description="Tenant counters plus the current user's open todos, unread notifications and points.",
)
async def dashboard_summary(user: CurrentUser, service: DashboardServiceDep) -> DashboardSummary:
    return DashboardSummary(**await service.summary(user.id))
