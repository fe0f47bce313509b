"""todo-core: signup/login, JWT access and refresh tokens, and per-user todos."""

__version__ = "0.1.0"
