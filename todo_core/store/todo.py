"""Todo-specific operations.

OWNERSHIP POLICY:
Every operation takes the authenticated user id. A todo that exists but
belongs to someone else is reported exactly like one that does not exist,
so callers cannot probe for other users' ids.

ID GENERATION POLICY:
Ids come from a counter that only moves forward. Deleting a todo never
frees its id for reuse.
"""

import logging
import threading
from dataclasses import dataclass, replace

from ..exceptions import ResourceNotFound

logger = logging.getLogger(__name__)


@dataclass
class Todo:
    """Stored todo record."""

    id: int
    title: str
    completed: bool
    user_id: int


class TodoStore:
    """In-memory, ownership-scoped todo collection.

    Records handed out are copies; mutating them does not touch the store.
    """

    def __init__(self):
        self._todos: list[Todo] = []
        self._next_id = 1
        self._lock = threading.Lock()

    def _find(self, user_id: int, todo_id: int) -> int:
        """Index of the todo matching both id and owner. Caller holds the lock."""
        for index, todo in enumerate(self._todos):
            if todo.id == todo_id and todo.user_id == user_id:
                return index

        raise ResourceNotFound("Todo not found", {"todo_id": todo_id})

    def create(self, user_id: int, title: str) -> Todo:
        """Create an incomplete todo owned by ``user_id``."""
        with self._lock:
            todo = Todo(id=self._next_id, title=title, completed=False, user_id=user_id)
            self._next_id += 1
            self._todos.append(todo)

        logger.info(f"Created todo {todo.id} for user {user_id}")
        return replace(todo)

    def list(self, user_id: int) -> list[Todo]:
        """All todos owned by ``user_id`` in insertion order."""
        with self._lock:
            return [replace(todo) for todo in self._todos if todo.user_id == user_id]

    def get(self, user_id: int, todo_id: int) -> Todo:
        """
        Get a todo by id.

        Raises:
            ResourceNotFound: If no todo matches both id and owner
        """
        with self._lock:
            return replace(self._todos[self._find(user_id, todo_id)])

    def update(
        self,
        user_id: int,
        todo_id: int,
        title: str | None = None,
        completed: bool | None = None,
    ) -> Todo:
        """
        Partially update a todo.

        Only supplied fields change. An empty title counts as not supplied
        and leaves the existing title in place.

        Raises:
            ResourceNotFound: If no todo matches both id and owner
        """
        with self._lock:
            index = self._find(user_id, todo_id)
            current = self._todos[index]
            updated = replace(
                current,
                title=title or current.title,
                completed=completed if completed is not None else current.completed,
            )
            self._todos[index] = updated

        logger.debug(f"Updated todo {todo_id} for user {user_id}")
        return replace(updated)

    def delete(self, user_id: int, todo_id: int) -> Todo:
        """
        Remove a todo and return it.

        Raises:
            ResourceNotFound: If no todo matches both id and owner
        """
        with self._lock:
            deleted = self._todos.pop(self._find(user_id, todo_id))

        logger.info(f"Deleted todo {todo_id} for user {user_id}")
        return deleted

    def __len__(self) -> int:
        with self._lock:
            return len(self._todos)
