"""Dashboard schemas."""

from pydantic import BaseModel


class DashboardSummary(BaseModel):
    contacts: int
    companies: int
    open_deals: int
    open_deal_value: float
    active_contracts: int
    my_open_todos: int
    my_unread_notifications: int
    my_points: int
