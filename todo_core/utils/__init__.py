"""Utility functions for todo-core.

Import convention: use module-level imports for clarity.

    from todo_core.utils import isodatetime
    issued_at = isodatetime.now_unix()
"""

from . import isodatetime

__all__ = ["isodatetime"]
