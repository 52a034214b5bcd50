"""Todos: completion and assignment notifications."""

from uuid import UUID

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from src.crm.core.logging import get_logger
from src.crm.models.base import utc_now
from src.crm.models.enums import NotificationType, RewardAction, TodoStatus
from src.crm.models.tenant import Todo
from src.crm.repositories import TodoRepository
from src.crm.services.entity_service import EntityService
from src.crm.services.notification_service import NotificationService
from src.crm.services.reward_service import RewardService

logger = get_logger(__name__)


class TodoService(EntityService[Todo]):
    def __init__(
        self,
        todo_repo: TodoRepository,
        session: AsyncSession,
        reward_service: RewardService,
        notification_service: NotificationService,
    ):
        super().__init__(todo_repo, session, "Todo", reward_service=reward_service)
        self.notification_service = notification_service

    async def create(self, data: BaseModel, user_id: UUID) -> Todo:
        todo = await super().create(data, user_id)
        await self._notify_assignee(todo, user_id)
        return todo

    async def update(self, entity_id: UUID, data: BaseModel, user_id: UUID) -> Todo:
        previous_assignee = (await self.get(entity_id)).assigned_to
        todo = await super().update(entity_id, data, user_id)
        if todo.assigned_to != previous_assignee:
            await self._notify_assignee(todo, user_id)
        return todo

    async def complete(self, todo_id: UUID, user_id: UUID) -> tuple[Todo, int]:
        """Mark a todo completed and award points.

        Completing an already completed todo changes nothing and awards nothing.
        """
        todo = await self.get(todo_id)
        if todo.is_completed:
            return todo, 0

        try:
            now = utc_now()
            todo.status = TodoStatus.COMPLETED.value
            todo.completed_at = now
            todo.completed_by = user_id
            todo.updated_at = now
            self.session.add(todo)
            points = await self._award(user_id, RewardAction.COMPLETE_TODO.value, todo)
            await self.session.commit()
            await self.session.refresh(todo)
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to complete todo", todo_id=str(todo_id), error=str(e))
            raise

        logger.info("Todo completed", todo_id=str(todo_id), points=points)
        return todo, points

    async def _notify_assignee(self, todo: Todo, user_id: UUID) -> None:
        if todo.assigned_to is None or todo.assigned_to == user_id:
            return
        await self.notification_service.notify(
            todo.assigned_to,
            "New todo assigned",
            f'You have been assigned "{todo.title}".',
            NotificationType.TODO_ASSIGNED.value,
            entity_type="todos",
            entity_id=todo.id,
        )
