"""Saved reports, report data generation and HTML export."""

import html
from datetime import date, datetime, timedelta
from typing import Any
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy import String, cast
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from src.crm.core.exceptions import NotFoundError, PermissionDeniedError
from src.crm.core.logging import get_logger
from src.crm.models.base import utc_now
from src.crm.models.enums import ReportDataSource
from src.crm.models.tenant import Company, Contact, Contract, Deal, Quote, Report, Todo
from src.crm.repositories import ReportDataRepository, ReportRepository
from src.crm.schemas.report import FilterSpec, QueryConfig

logger = get_logger(__name__)

DATA_SOURCES: dict[str, type[SQLModel]] = {
    ReportDataSource.CONTACTS.value: Contact,
    ReportDataSource.COMPANIES.value: Company,
    ReportDataSource.DEALS.value: Deal,
    ReportDataSource.CONTRACTS.value: Contract,
    ReportDataSource.QUOTES.value: Quote,
    ReportDataSource.TODOS.value: Todo,
}

# Internal columns never exposed in report rows.
HIDDEN_COLUMNS = frozenset({"tenant_id", "deleted_at", "deleted_by"})

# Sources whose rows get company_name / assigned_salesperson columns.
COMPANY_SOURCES = frozenset({"contacts", "deals", "contracts"})
SALESPERSON_SOURCES = frozenset({"deals", "contracts", "quotes", "todos"})


def _coerce(column: Any, value: Any) -> Any:
    """Convert a JSON filter value to the column's Python type.

    Raises:
        ValueError: If the value cannot be converted.
    """
    if value is None:
        return None
    try:
        python_type = column.type.python_type
    except NotImplementedError:
        return value

    if isinstance(value, python_type) and not (python_type is date and isinstance(value, datetime)):
        return value
    text = str(value).strip()
    if python_type is datetime:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).replace(tzinfo=None)
    if python_type is date:
        return date.fromisoformat(text[:10])
    if python_type is bool:
        return text.lower() in ("true", "1", "yes")
    if python_type is UUID:
        return UUID(text)
    if python_type in (int, float):
        return python_type(float(text)) if python_type is int else float(text)
    return text


def build_condition(model: type[SQLModel], spec: FilterSpec) -> Any | None:
    """SQL condition for one filter, or None for unknown fields and operators."""
    if spec.field in HIDDEN_COLUMNS or spec.field not in model.model_fields:
        return None
    column = getattr(model, spec.field, None)
    if column is None or not hasattr(column, "type"):
        return None

    operator = spec.operator
    try:
        if operator == "is_null":
            return column.is_(None)
        if operator == "is_not_null":
            return column.is_not(None)
        if operator == "contains":
            return cast(column, String).ilike(f"%{spec.value}%")
        if operator == "in_last_days":
            if column.type.python_type not in (date, datetime):
                return None
            cutoff: datetime | date = utc_now() - timedelta(days=int(spec.value))
            if column.type.python_type is date:
                cutoff = cutoff.date()
            return column >= cutoff

        value = _coerce(column, spec.value)
        if operator == "equals":
            return column == value
        if operator == "not_equals":
            return column != value
        if operator in ("greater_than", "after_date"):
            return column > value
        if operator in ("less_than", "before_date"):
            return column < value
        if operator == "greater_than_or_equal":
            return column >= value
        if operator == "less_than_or_equal":
            return column <= value
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid value for filter on '{spec.field}'") from e
    return None


def format_header(field: str) -> str:
    """deal_value -> Deal Value"""
    return " ".join(word[:1].upper() + word[1:] for word in field.split("_"))


def _format_date(value: Any) -> str:
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            return value
    if isinstance(value, date):
        return f"{value.month}/{value.day}/{value.year}"
    return str(value)


def _format_usd(value: float) -> str:
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def format_value(value: Any, field: str) -> str:
    """Render one cell: '-' for missing, dates as M/D/YYYY, 'value' as USD."""
    if value is None:
        return "-"
    if "date" in field or "created_at" in field or "updated_at" in field:
        return _format_date(value)
    if field == "value" and isinstance(value, int | float) and not isinstance(value, bool):
        return _format_usd(value)
    return str(value)


def render_table(rows: list[dict[str, Any]], fields: list[str]) -> str:
    """HTML table of rows; every cell is escaped."""
    header = "".join(
        f'<th style="border: 1px solid #ddd; padding: 8px; background-color: #f5f5f5;">'
        f"{html.escape(format_header(field))}</th>"
        for field in fields
    )
    body = "".join(
        "<tr>"
        + "".join(
            f'<td style="border: 1px solid #ddd; padding: 8px;">'
            f"{html.escape(format_value(row.get(field), field))}</td>"
            for field in fields
        )
        + "</tr>"
        for row in rows
    )
    return (
        '<table style="width: 100%; border-collapse: collapse;">'
        f"<thead><tr>{header}</tr></thead><tbody>{body}</tbody></table>"
    )


def render_document(title: str, rows: list[dict[str, Any]], fields: list[str]) -> str:
    """Standalone HTML page for export."""
    safe_title = html.escape(title)
    generated = utc_now().strftime("%Y-%m-%d %H:%M UTC")
    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>{safe_title}</title>
</head>
<body style="font-family: Arial, sans-serif; margin: 20px;">
    <h1 style="color: #333; border-bottom: 2px solid #eee; padding-bottom: 10px;">{safe_title}</h1>
    <div style="color: #666; font-size: 12px; margin-bottom: 20px;">
        Generated on: {generated}<br>
        Total Records: {len(rows)}
    </div>
    {render_table(rows, fields)}
</body>
</html>"""


def report_fields(rows: list[dict[str, Any]], query_config: QueryConfig) -> list[str]:
    """Columns to render: the configured fields, else every key of the first row."""
    if query_config.fields:
        return list(query_config.fields)
    return list(rows[0].keys()) if rows else []


class ReportService:
    """Report definitions and report data for one tenant."""

    def __init__(
        self,
        report_repo: ReportRepository,
        data_repo: ReportDataRepository,
        session: AsyncSession,
    ):
        self.report_repo = report_repo
        self.data_repo = data_repo
        self.session = session
        self.tenant_id = report_repo.tenant_id

    async def generate(
        self, data_source: str, query_config: QueryConfig | dict[str, Any]
    ) -> dict[str, Any]:
        """Run a report query.

        Returns:
            {"data": rows, "count": len(rows)}

        Raises:
            ValueError: Unsupported data source or an unusable filter value.
        """
        model = DATA_SOURCES.get(data_source)
        if model is None:
            raise ValueError(f"Unsupported data source: {data_source}")
        config = (
            query_config
            if isinstance(query_config, QueryConfig)
            else QueryConfig.model_validate(query_config or {})
        )

        conditions = [
            condition
            for condition in (build_condition(model, spec) for spec in config.filters)
            if condition is not None
        ]

        order_by = model.created_at.desc()  # type: ignore[attr-defined]
        if config.sorting:
            sort = config.sorting[0]
            if sort.field in model.model_fields and sort.field not in HIDDEN_COLUMNS:
                column = getattr(model, sort.field)
                order_by = column.asc() if sort.direction == "asc" else column.desc()

        entities = await self.data_repo.fetch(model, conditions, order_by=order_by)
        rows = [
            {key: value for key, value in entity.model_dump().items() if key not in HIDDEN_COLUMNS}
            for entity in entities
        ]
        await self._flatten(data_source, rows)

        if config.fields:
            rows = [{field: row[field] for field in config.fields if field in row} for row in rows]

        logger.info("Report data generated", data_source=data_source, rows=len(rows))
        return {"data": rows, "count": len(rows)}

    async def _flatten(self, data_source: str, rows: list[dict[str, Any]]) -> None:
        """Add display names for related companies and assignees."""
        if data_source in COMPANY_SOURCES:
            names = await self.data_repo.company_names(
                {row["company_id"] for row in rows if row.get("company_id")}
            )
            for row in rows:
                row["company_name"] = names.get(row.get("company_id"), "")  # type: ignore[arg-type]
        if data_source in SALESPERSON_SOURCES:
            people = await self.data_repo.profile_names(
                {row["assigned_to"] for row in rows if row.get("assigned_to")}
            )
            for row in rows:
                row["assigned_salesperson"] = people.get(row.get("assigned_to"), "")  # type: ignore[arg-type]

    async def generate_for_report(self, report_id: UUID, user_id: UUID) -> dict[str, Any]:
        report = await self.get(report_id, user_id)
        return await self.generate(report.data_source, report.query_config)

    async def export(self, report_id: UUID, user_id: UUID) -> dict[str, Any]:
        """Render the report as an HTML document (no PDF conversion)."""
        report = await self.get(report_id, user_id)
        config = QueryConfig.model_validate(report.query_config or {})
        result = await self.generate(report.data_source, config)
        rows = result["data"]
        return {
            "success": True,
            "html": render_document(report.name, rows, report_fields(rows, config)),
            "message": f"Report exported as HTML ({len(rows)} rows). PDF rendering is not available.",
        }

    async def list_page(
        self, user_id: UUID, cursor: str | None, limit: int
    ) -> tuple[list[Report], str | None, bool]:
        return await self.report_repo.list_visible_page(user_id, cursor, limit)

    async def get(self, report_id: UUID, user_id: UUID) -> Report:
        report = await self.report_repo.get_visible(report_id, user_id)
        if report is None:
            raise NotFoundError("Report not found")
        return report

    async def _get_owned(self, report_id: UUID, user_id: UUID) -> Report:
        report = await self.get(report_id, user_id)
        if report.created_by != user_id:
            raise PermissionDeniedError("Only the creator can modify this report")
        return report

    async def create(self, data: BaseModel, user_id: UUID) -> Report:
        try:
            report = Report(tenant_id=self.tenant_id, created_by=user_id, **data.model_dump())
            self.report_repo.add(report)
            await self.session.commit()
            await self.session.refresh(report)
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to create report", error=str(e))
            raise
        logger.info("Report created", report_id=str(report.id))
        return report

    async def update(self, report_id: UUID, data: BaseModel, user_id: UUID) -> Report:
        report = await self._get_owned(report_id, user_id)
        try:
            for field, value in data.model_dump(exclude_unset=True).items():
                setattr(report, field, value)
            report.updated_at = utc_now()
            self.session.add(report)
            await self.session.commit()
            await self.session.refresh(report)
            return report
        except Exception:
            await self.session.rollback()
            raise

    async def delete(self, report_id: UUID, user_id: UUID) -> None:
        report = await self._get_owned(report_id, user_id)
        try:
            report.active = False
            report.updated_at = utc_now()
            self.session.add(report)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
