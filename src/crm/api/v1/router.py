from fastapi import APIRouter

from src.crm.api.v1 import (
    contacts,
    dashboard,
    deals,
    devices,
    invitations,
    notifications,
    profile,
    reports,
    rewards,
    scheduled_reports,
    tenants,
    todos,
)

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(tenants.router)
api_router.include_router(profile.router)
api_router.include_router(invitations.router)
api_router.include_router(dashboard.router)
api_router.include_router(contacts.contacts_router)
api_router.include_router(contacts.companies_router)
api_router.include_router(deals.deals_router)
api_router.include_router(deals.contracts_router)
api_router.include_router(deals.quotes_router)
api_router.include_router(todos.router)
api_router.include_router(notifications.router)
api_router.include_router(rewards.router)
api_router.include_router(devices.catalog_router)
api_router.include_router(devices.devices_router)
api_router.include_router(devices.templates_router)
api_router.include_router(reports.router)
api_router.include_router(scheduled_reports.router)
