"""In-memory stores for todo-core.

ARCHITECTURE:
- One Stores container per Flask app, kept in ``app.extensions``
- Each store owns its own lock; no module-level mutable state
- Handlers reach the stores through get_stores(), never through globals

State lives for the process lifetime only.

    stores = get_stores()
    user = stores.credentials.verify(username, password)
    todo = stores.todos.create(user.id, "buy milk")
"""

from dataclasses import dataclass

from flask import Flask, current_app

from ..auth.service import CredentialStore
from ..auth.token import TokenService
from ..config import Settings
from .todo import Todo, TodoStore

EXTENSION_KEY = "todo_core"


@dataclass
class Stores:
    """Container for the three process-lifetime stores."""

    credentials: CredentialStore
    tokens: TokenService
    todos: TodoStore

    @classmethod
    def from_settings(cls, settings: Settings) -> "Stores":
        """Build empty stores configured from settings."""
        return cls(
            credentials=CredentialStore(work_factor=settings.bcrypt_work_factor),
            tokens=TokenService(
                secret_key=settings.jwt_secret_key,
                algorithm=settings.jwt_algorithm,
                access_token_expiry_seconds=settings.access_token_expiry_seconds,
            ),
            todos=TodoStore(),
        )


def init_stores(app: Flask, stores: Stores) -> None:
    """Attach stores to an app."""
    app.extensions[EXTENSION_KEY] = stores


def get_stores() -> Stores:
    """
    Get the stores for the current app.

    Must be called inside an application or request context.
    """
    return current_app.extensions[EXTENSION_KEY]


__all__ = ["Stores", "Todo", "TodoStore", "init_stores", "get_stores"]
