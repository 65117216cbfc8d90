"""Repository for Todo CRUD operations.

Ownership is not checked here: list_for_user and create are scoped by the
caller-supplied user_id, and get_by_id/update/delete operate on whatever
row they are given. The Ownership Guard in tasktrack.api.deps runs before
any update or delete.
"""

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tasktrack.models.todo import Todo

# Fields that may be updated via TodoRepository.update().
# user_id is deliberately absent: ownership never changes after creation.
_UPDATABLE_FIELDS: frozenset[str] = frozenset({"title", "completed"})


class TodoRepository:
    """Stateless repository for Todo table operations.

    All methods are static. Pass an AsyncSession for every call so the
    caller controls transaction boundaries.
    """

    @staticmethod
    async def list_for_user(db: AsyncSession, user_id: uuid.UUID) -> list[Todo]:
        """All todos owned by a user, oldest first.

        Args:
            db: Async database session.
            user_id: Owner UUID.

        Returns:
            List of Todo rows (empty if the user has none).
        """
        stmt = (
            select(Todo)
            .where(Todo.user_id == user_id)
            .order_by(Todo.created_at, Todo.id)
        )
        result = await db.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def get_by_id(db: AsyncSession, todo_id: uuid.UUID) -> Todo | None:
        """Fetch a todo by primary key regardless of owner."""
        return await db.get(Todo, todo_id)

    @staticmethod
    async def create(db: AsyncSession, *, user_id: uuid.UUID, title: str) -> Todo:
        """Create an incomplete todo for a user.

        Args:
            db: Async database session.
            user_id: Owner UUID.
            title: Task title (validated by the request schema).

        Returns:
            Created Todo with generated id and timestamps.
        """
        todo = Todo(user_id=user_id, title=title, completed=False)
        db.add(todo)
        await db.flush()
        await db.refresh(todo)
        return todo

    @staticmethod
    async def update(db: AsyncSession, todo: Todo, **kwargs: str | bool) -> Todo:
        """Apply a partial update.

        Only fields in _UPDATABLE_FIELDS are allowed; fields not passed
        are left unchanged.

        Args:
            db: Async database session.
            todo: Todo to modify.
            **kwargs: Field names and new values.

        Returns:
            The refreshed Todo.

        Raises:
            ValueError: If an unknown field name is passed.
        """
        unknown = set(kwargs) - _UPDATABLE_FIELDS
        if unknown:
            msg = f"Unknown fields: {', '.join(sorted(unknown))}"
            raise ValueError(msg)

        for field, value in kwargs.items():
            setattr(todo, field, value)

        await db.flush()
        await db.refresh(todo)
        return todo

    @staticmethod
    async def delete(db: AsyncSession, todo: Todo) -> None:
        """Hard-delete a todo."""
        await db.delete(todo)
        await db.flush()
