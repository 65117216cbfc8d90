"""Todo endpoints.

Every route requires an authenticated user. Routes addressing a single
todo go through the OwnedTodo dependency, which returns 404 for unknown ids
and 403 for todos owned by someone else.
"""

from fastapi import APIRouter, Response

from tasktrack.api.deps import CurrentUser, DbSession, OwnedTodo
from tasktrack.core.responses import DataResponse
from tasktrack.repositories.todo_repository import TodoRepository
from tasktrack.schemas.todo import TodoCreate, TodoRead, TodoUpdate

router = APIRouter()


@router.get("")
async def list_todos(user: CurrentUser, db: DbSession) -> DataResponse[list[TodoRead]]:
    """List the current user's todos."""
    todos = await TodoRepository.list_for_user(db, user.id)
    return DataResponse(data=[TodoRead.model_validate(t) for t in todos])


@router.post("", status_code=201)
async def create_todo(
    body: TodoCreate, user: CurrentUser, db: DbSession
) -> DataResponse[TodoRead]:
    """Create a todo owned by the current user. completed starts False."""
    todo = await TodoRepository.create(db, user_id=user.id, title=body.title)
    await db.commit()
    return DataResponse(data=TodoRead.model_validate(todo))


@router.get("/{todo_id}")
async def get_todo(todo: OwnedTodo) -> DataResponse[TodoRead]:
    """Fetch a single todo."""
    return DataResponse(data=TodoRead.model_validate(todo))


@router.put("/{todo_id}")
@router.patch("/{todo_id}")
async def update_todo(
    body: TodoUpdate, todo: OwnedTodo, db: DbSession
) -> DataResponse[TodoRead]:
    """Update title and/or completed. Omitted fields are left unchanged."""
    todo = await TodoRepository.update(db, todo, **body.changes())
    await db.commit()
    return DataResponse(data=TodoRead.model_validate(todo))


@router.delete("/{todo_id}", status_code=204)
async def delete_todo(todo: OwnedTodo, db: DbSession) -> Response:
    """Delete a todo."""
    await TodoRepository.delete(db, todo)
    await db.commit()
    return Response(status_code=204)
