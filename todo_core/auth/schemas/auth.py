"""Pydantic schemas for authentication requests, responses and JWT claims."""

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, Field, StrictInt
from pydantic_core import PydanticCustomError


def required(message: str):
    """Build a before-validator that rejects missing, null and empty values.

    The message is reported verbatim so the validation layer can surface it
    as the response message.
    """
    def check(value: Any) -> Any:
        if value is None or value == "":
            raise PydanticCustomError("required", message)
        return value

    return BeforeValidator(check)


def encodable(message: str):
    """Build a before-validator that rejects text UTF-8 cannot encode.

    JSON escapes can smuggle in lone surrogates such as ``\\ud800``.
    """
    def check(value: Any) -> Any:
        if isinstance(value, str):
            try:
                value.encode("utf-8")
            except UnicodeEncodeError:
                raise PydanticCustomError("invalid_text", message) from None
        return value

    return BeforeValidator(check)


# ============================================================================
# Credential Schemas
# ============================================================================

Username = Annotated[
    str, required("Username is required"), encodable("Username must be valid text")
]
Password = Annotated[
    str, required("Password is required"), encodable("Password must be valid text")
]


class UserCreate(BaseModel):
    """Signup request body."""

    username: Username = Field(default=None, validate_default=True)
    password: Password = Field(default=None, validate_default=True)


class UserLogin(BaseModel):
    """Login request body."""

    username: Username = Field(default=None, validate_default=True)
    password: Password = Field(default=None, validate_default=True)


class UserResponse(BaseModel):
    """Public view of a user. Never includes the password hash."""

    id: int
    username: str


# ============================================================================
# Token Schemas
# ============================================================================


class RefreshRequest(BaseModel):
    """Refresh request body (``{"refreshToken": "..."}``)."""

    refresh_token: Annotated[str, required("Refresh token is required")] = Field(
        default=None, alias="refreshToken", validate_default=True
    )


class TokenResponse(BaseModel):
    """Login response: a fresh access token and its refresh token."""

    token: str
    refresh_token: str = Field(serialization_alias="refreshToken")


class AccessTokenResponse(BaseModel):
    """Refresh response: a new access token only."""

    token: str


class TokenPayload(BaseModel):
    """Decoded access token claims.

    ``id`` must be a real positive integer; booleans, strings and floats
    are rejected so a forged or foreign token cannot pass as ours.
    """

    id: StrictInt = Field(ge=1)
    iat: StrictInt | None = None
    exp: StrictInt
