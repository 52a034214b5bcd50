"""Shared enums for models."""

from enum import Enum


class MembershipRole(str, Enum):
    """User role within a tenant."""

    OWNER = "owner"
    ADMIN = "admin"
    MEMBER = "member"


class InvitationStatus(str, Enum):
    """Tenant invitation status."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    CANCELLED = "cancelled"
    EXPIRED = "expired"


class DealStatus(str, Enum):
    LEAD = "lead"
    QUALIFIED = "qualified"
    PROPOSAL = "proposal"
    NEGOTIATION = "negotiation"
    WON = "won"
    LOST = "lost"


class ContractStatus(str, Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class QuoteStatus(str, Enum):
    DRAFT = "draft"
    SENT = "sent"
    APPROVED = "approved"
    REJECTED = "rejected"
    EXPIRED = "expired"


class TodoStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class NotificationType(str, Enum):
    """Built-in notification types. Preferences may name others."""

    TODO_ASSIGNED = "todo_assigned"
    DEAL_WON = "deal_won"
    INVITATION_ACCEPTED = "invitation_accepted"
    REPORT_DELIVERED = "report_delivered"
    GENERAL = "general"


class RewardAction(str, Enum):
    """Action names with a seeded reward configuration."""

    COMPLETE_TODO = "complete_todo"
    CREATE_DEAL = "create_deal"
    CREATE_CONTACT = "create_contact"
    CREATE_COMPANY = "create_company"
    MOVE_DEAL_STAGE = "move_deal_stage"
    CONVERT_DEAL_TO_CONTRACT = "convert_deal_to_contract"


class PeriodType(str, Enum):
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class ScheduleType(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class ReportDataSource(str, Enum):
    CONTACTS = "contacts"
    COMPANIES = "companies"
    DEALS = "deals"
    CONTRACTS = "contracts"
    QUOTES = "quotes"
    TODOS = "todos"


class ReportVisibility(str, Enum):
    PRIVATE = "private"
    TENANT = "tenant"


class TemplateImportStatus(str, Enum):
    LOCAL = "local"
    IMPORTED = "imported"
