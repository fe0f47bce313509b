"""Pydantic schemas for the todo API."""

from .todo import TodoCreate, TodoResponse, TodoUpdate

__all__ = [
    "TodoCreate",
    "TodoUpdate",
    "TodoResponse",
]
