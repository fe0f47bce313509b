"""Custom exceptions for todo-core.

Every exception carries a human-readable ``message`` and an optional
``details`` dict. The Flask error handlers in ``main.py`` map each class
to a single HTTP status code.
"""


class TodoCoreError(Exception):
    """Base exception for all todo-core errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(TodoCoreError):
    """Request payload failed validation (400)."""


class DuplicateUsername(TodoCoreError):
    """Signup attempted with a username that is already taken (400)."""


class AuthenticationError(TodoCoreError):
    """Base class for authentication failures (401)."""


class AuthFailure(AuthenticationError):
    """Username/password pair did not match a user.

    The message never says which half was wrong.
    """


class Unauthorized(AuthenticationError):
    """No bearer token supplied."""


class InvalidToken(AuthenticationError):
    """Token is expired, malformed, badly signed, or unknown."""


class ResourceNotFound(TodoCoreError):
    """Resource does not exist or is not owned by the caller (404)."""
