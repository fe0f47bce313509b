"""Pydantic schemas for todo requests and responses."""

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, Field
from pydantic_core import PydanticCustomError

from ...auth.schemas import required
from ...store.todo import Todo


def _strict_bool(value: Any) -> Any:
    # JSON true/false only; "true", 1 and null are rejected
    if not isinstance(value, bool):
        raise PydanticCustomError("bool_type", "Completed must be a boolean value")
    return value


class TodoCreate(BaseModel):
    """Create request body."""

    title: Annotated[str, required("Title is required")] = Field(
        default=None, validate_default=True
    )


class TodoUpdate(BaseModel):
    """Update request body. All fields optional; absent fields are left alone."""

    title: Annotated[str | None, required("Title is required")] = None
    completed: Annotated[bool | None, BeforeValidator(_strict_bool)] = None


class TodoResponse(BaseModel):
    """Todo as returned to clients."""

    id: int
    title: str
    completed: bool
    user_id: int = Field(serialization_alias="userId")

    @classmethod
    def from_todo(cls, todo: Todo) -> "TodoResponse":
        return cls(id=todo.id, title=todo.title, completed=todo.completed, user_id=todo.user_id)
