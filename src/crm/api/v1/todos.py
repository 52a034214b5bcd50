"""Todo endpoints."""

from uuid import UUID

from src.crm.api.dependencies import CurrentUser, TodoServiceDep
from src.crm.api.dependencies.services import get_todo_service
from src.crm.api.v1.crud import build_crud_router
from src.crm.core.exceptions import raise_http_error
from src.crm.schemas.todo import TodoCompleteResult, TodoCreate, TodoRead, TodoUpdate

router = build_crud_router(
    prefix="todos",
    label="Todo",
    get_service=get_todo_service,
    create_schema=TodoCreate,
    update_schema=TodoUpdate,
    read_schema=TodoRead,
)


@router.post(
    "/{todo_id}/complete",
    response_model=TodoCompleteResult,
    summary="Complete todo",
    description="Mark a todo completed and award points. Completing it again changes nothing.",
    responses={404: {"description": "Todo not found"}},
)
async def complete_todo(
    todo_id: UUID,
    user: CurrentUser,
    service: TodoServiceDep,
) -> TodoCompleteResult:
    try:
        todo, points = await service.complete(todo_id, user.id)
    except ValueError as e:
        raise_http_error(e)
    return TodoCompleteResult(todo=TodoRead.model_validate(todo), points_awarded=points)
