"""Local todo list state with optimistic updates.

Changes are applied to the local list first and confirmed (or replaced)
with the server's copy; on an API error the local change is rolled back.
On SessionExpiredError all local state is discarded before re-raising.
"""

import logging

from tasktrack.client.errors import ApiClientError, SessionExpiredError
from tasktrack.client.session import TasktrackClient

logger = logging.getLogger(__name__)


class TodoListView:
    """Client-held copy of the current user's todos.

    Args:
        client: Authenticated TasktrackClient.
    """

    def __init__(self, client: TasktrackClient) -> None:
        self._client = client
        self.todos: list[dict] = []

    def _index(self, todo_id: str) -> int:
        for i, todo in enumerate(self.todos):
            if todo["id"] == todo_id:
                return i
        raise KeyError(todo_id)

    def _discard(self) -> None:
        self.todos = []

    def refresh(self) -> list[dict]:
        """Replace local state with the server's list."""
        try:
            self.todos = self._client.list_todos()
        except SessionExpiredError:
            self._discard()
            raise
        return self.todos

    def add(self, title: str) -> dict:
        """Create a todo and append the server's copy."""
        try:
            todo = self._client.create_todo(title)
        except SessionExpiredError:
            self._discard()
            raise
        self.todos.append(todo)
        return todo

    def _apply(self, todo_id: str, **changes: object) -> dict:
        i = self._index(todo_id)
        previous = self.todos[i]
        self.todos[i] = {**previous, **changes}
        try:
            confirmed = self._client.update_todo(todo_id, **changes)
        except SessionExpiredError:
            self._discard()
            raise
        except ApiClientError:
            logger.info("Rolling back local change to todo %s", todo_id)
            self.todos[i] = previous
            raise
        self.todos[i] = confirmed
        return confirmed

    def toggle(self, todo_id: str) -> dict:
        """Flip completion optimistically."""
        current = self.todos[self._index(todo_id)]
        return self._apply(todo_id, completed=not current["completed"])

    def rename(self, todo_id: str, title: str) -> dict:
        """Change the title optimistically."""
        return self._apply(todo_id, title=title)

    def remove(self, todo_id: str) -> None:
        """Delete optimistically; restore at the same position on failure."""
        i = self._index(todo_id)
        removed = self.todos.pop(i)
        try:
            self._client.delete_todo(todo_id)
        except SessionExpiredError:
            self._discard()
            raise
        except ApiClientError:
            logger.info("Restoring todo %s after failed delete", todo_id)
            self.todos.insert(i, removed)
            raise
