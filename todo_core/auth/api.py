"""Authentication API endpoints for todo-core.

These endpoints handle signup and the token lifecycle:
- POST /signup  - Create an account
- POST /login   - Verify credentials, issue access + refresh tokens
- POST /refresh - Exchange a refresh token for a new access token

All endpoints return JSON. Failed logins and refreshes use one generic
message so responses never reveal whether an account exists.
"""

import logging

from flask import Blueprint, jsonify

from ..api.validation import validate_request
from ..exceptions import AuthFailure
from ..store import get_stores
from .schemas import (
    AccessTokenResponse,
    RefreshRequest,
    TokenResponse,
    UserCreate,
    UserLogin,
    UserResponse,
)

logger = logging.getLogger(__name__)


# Create blueprint
auth_bp = Blueprint("auth", __name__)


@auth_bp.post("/signup")
@validate_request
def signup(data: UserCreate):
    """
    Create a user account.

    Example request:
    ```json
    {"username": "alice", "password": "pw1"}
    ```

    Example response (201):
    ```json
    {"id": 1, "username": "alice"}
    ```

    Raises:
        DuplicateUsername: If the username is taken (400)
    """
    user = get_stores().credentials.register(data.username, data.password)

    return jsonify(UserResponse(id=user.id, username=user.username).model_dump()), 201


@auth_bp.post("/login")
@validate_request
def login(data: UserLogin):
    """
    Authenticate and return an access token plus a refresh token.

    Example response:
    ```json
    {
        "token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
        "refreshToken": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9..."
    }
    ```

    Raises:
        AuthFailure: If the credentials are invalid (401)
    """
    stores = get_stores()
    try:
        user = stores.credentials.verify(data.username, data.password)
    except AuthFailure:
        logger.warning(f"Failed login attempt for username: {data.username}")
        raise

    access_token = stores.tokens.issue_access_token(user.id)
    refresh_token = stores.tokens.issue_refresh_token(user.id)
    stores.tokens.bind_refresh(refresh_token, user.id)

    logger.info(f"Successful login: {user.username}")

    return jsonify(
        TokenResponse(token=access_token, refresh_token=refresh_token).model_dump(by_alias=True)
    ), 200


@auth_bp.post("/refresh")
@validate_request
def refresh(data: RefreshRequest):
    """
    Exchange a refresh token for a new access token.

    The refresh token stays valid and can be exchanged again.

    Example request:
    ```json
    {"refreshToken": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9..."}
    ```

    Raises:
        InvalidToken: If the refresh token is unknown or its user is gone (401)
    """
    stores = get_stores()
    access_token = stores.tokens.refresh(data.refresh_token, stores.credentials)

    return jsonify(AccessTokenResponse(token=access_token).model_dump()), 200
