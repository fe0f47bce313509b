"""Authentication decorators for protected endpoints.

This module provides the request authorizer:
- authenticate_request() - Resolves the bearer token to a user id
- @auth_required - Requires a valid access token before the view runs

Stack @auth_required above @validate_request so a missing token answers
401 before the body is looked at.
"""

import logging
from functools import wraps

from flask import g, request

from ..exceptions import Unauthorized
from ..store import get_stores

logger = logging.getLogger(__name__)


# ============================================================================
# Shared Authentication Logic
# ============================================================================


def extract_bearer_token(auth_header: str | None) -> str | None:
    """
    Pull the token out of an ``Authorization: Bearer <token>`` header.

    Returns None when the header is absent, uses another scheme, or has no
    token.
    """
    if not auth_header:
        return None

    parts = auth_header.split(" ")
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1]:
        return None

    return parts[1]


def authenticate_request() -> int:
    """
    Shared authentication logic for requests.

    Verifies the access token via the token service and stores the user id
    in ``flask.g.user_id`` for downstream handlers.

    Returns:
        Authenticated user id

    Raises:
        Unauthorized: If no bearer token was supplied
        InvalidToken: If the token service rejects the token
    """
    token_str = extract_bearer_token(request.headers.get("Authorization"))
    if token_str is None:
        logger.warning("Unauthenticated request to protected endpoint")
        raise Unauthorized("Unauthorized", {"expected": "Authorization: Bearer <token>"})

    user_id = get_stores().tokens.verify_access(token_str)

    g.user_id = user_id
    logger.debug(f"Authenticated request for user {user_id}")
    return user_id


# ============================================================================
# Auth Required Decorator
# ============================================================================


def auth_required(f):
    """
    Decorator to require authentication for endpoint access.

    Example:
    ```python
    @auth_required
    def protected_endpoint():
        user_id = g.user_id
        ...
    ```
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        authenticate_request()
        return f(*args, **kwargs)

    return wrapper
