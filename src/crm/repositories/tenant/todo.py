"""Repository for todos."""

from uuid import UUID

from src.crm.models.enums import TodoStatus
from src.crm.models.tenant import Todo
from src.crm.repositories.base import TenantScopedRepository


class TodoRepository(TenantScopedRepository[Todo]):
    model = Todo
    search_fields = ("title",)

    async def count_open_for_user(self, user_id: UUID) -> int:
        """Pending or in-progress todos assigned to the user."""
        return await self.count(
            Todo.assigned_to == user_id,
            Todo.status.in_(  # type: ignore[attr-defined]
                [TodoStatus.PENDING.value, TodoStatus.IN_PROGRESS.value]
            ),
        )
