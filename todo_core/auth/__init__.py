"""Authentication module for todo-core.

This module provides authentication and authorization functionality:
- Schema validation for auth operations
- Credential store with bcrypt password hashing
- JWT access/refresh token issuance and verification
- Request authorizer for protected endpoints

Auth endpoints (top-level routes):
- POST /signup - Create an account
- POST /login - Authenticate and return access + refresh tokens
- POST /refresh - Exchange a refresh token for a new access token
"""

from . import schemas, service, token

__all__ = ["schemas", "service", "token"]
