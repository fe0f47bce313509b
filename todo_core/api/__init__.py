"""HTTP API for todo-core.

- todos: ownership-scoped todo CRUD blueprint (bearer auth required)
- validation: @validate_request body parsing
- schemas: request/response models
"""
