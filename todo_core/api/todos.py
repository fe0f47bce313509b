"""Todo CRUD endpoints for todo-core.

This module implements RESTful, ownership-scoped endpoints:
- GET    /todos          - List the caller's todos
- GET    /todos/{id}     - Get one of the caller's todos
- POST   /todos          - Create a todo
- PUT    /todos/{id}     - Partially update a todo
- DELETE /todos/{id}     - Delete a todo and return it

Every route requires a bearer access token. Todos owned by another user
are reported as 404, never 403.
"""

from flask import Blueprint, g, jsonify

from ..auth.decorators import auth_required
from ..store import get_stores
from .schemas import TodoCreate, TodoResponse, TodoUpdate
from .validation import validate_request

# Create Blueprint
todos_bp = Blueprint("todos", __name__, url_prefix="/todos")


def _todo_json(todo):
    return TodoResponse.from_todo(todo).model_dump(by_alias=True)


@todos_bp.get("")
@auth_required
def list_todos():
    """
    List the caller's todos in creation order.

    Returns:
        200: Array of Todo objects
    """
    todos = get_stores().todos.list(g.user_id)
    return jsonify([_todo_json(todo) for todo in todos])


@todos_bp.get("/<int:todo_id>")
@auth_required
def get_todo(todo_id: int):
    """
    Get a single todo by id.

    Returns:
        200: Todo
        404: Todo not found or owned by another user
    """
    todo = get_stores().todos.get(g.user_id, todo_id)
    return jsonify(_todo_json(todo))


@todos_bp.post("")
@auth_required
@validate_request
def create_todo(data: TodoCreate):
    """
    Create a new todo owned by the caller.

    Request Body (TodoCreate):
        - title: str (required, non-empty)

    Returns:
        200: Created Todo (completed is always false)
        400: Validation error
    """
    todo = get_stores().todos.create(g.user_id, data.title)
    return jsonify(_todo_json(todo)), 200


@todos_bp.put("/<int:todo_id>")
@auth_required
@validate_request
def update_todo(todo_id: int, data: TodoUpdate):
    """
    Update a todo.

    Only provided fields are updated (partial update).

    Request Body (TodoUpdate):
        - title: str | None (non-empty when present)
        - completed: bool | None

    Returns:
        200: Updated Todo
        400: Validation error
        404: Todo not found or owned by another user
    """
    update_data = data.model_dump(exclude_unset=True)
    todo = get_stores().todos.update(g.user_id, todo_id, **update_data)
    return jsonify(_todo_json(todo))


@todos_bp.delete("/<int:todo_id>")
@auth_required
def delete_todo(todo_id: int):
    """
    Delete a todo.

    Returns:
        200: The deleted Todo
        404: Todo not found or owned by another user
    """
    todo = get_stores().todos.delete(g.user_id, todo_id)
    return jsonify(_todo_json(todo))
