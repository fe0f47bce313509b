"""JWT token service.

Access tokens are HS256 JWTs carrying ``{"id", "iat", "exp"}`` and expire
after ``access_token_expiry_seconds`` (one hour by default). Refresh tokens
carry ``{"id", "iat"}`` and never expire. Both are signed with the same
process-wide secret; there is no key rotation and no ``kid`` header.

Refresh tokens are only honoured if they appear in the binding table, which
maps each refresh token to the id of the user who logged in. Bindings are
never revoked.
"""

import logging
import threading
from typing import Callable

import jwt
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import InvalidToken
from ..utils import isodatetime
from .schemas import TokenPayload
from .service import CredentialStore

logger = logging.getLogger(__name__)


class TokenService:
    """Issues and verifies access/refresh tokens."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        access_token_expiry_seconds: int = 60 * 60,
        clock: Callable[[], int] = isodatetime.now_unix,
    ):
        """
        Args:
            secret_key: HMAC signing secret
            algorithm: JWT signing algorithm
            access_token_expiry_seconds: Access token lifetime
            clock: Returns current Unix time; used for ``iat``/``exp`` at issuance
        """
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expiry_seconds = access_token_expiry_seconds
        self._clock = clock
        self._refresh_bindings: dict[str, int] = {}
        self._lock = threading.Lock()

    # ------------------------------------------------------------------------
    # Issuance
    # ------------------------------------------------------------------------

    def issue_access_token(self, user_id: int) -> str:
        """Issue a signed access token for ``user_id`` that expires in one hour."""
        issued_at = self._clock()
        payload = {
            "id": user_id,
            "iat": issued_at,
            "exp": issued_at + self._expiry_seconds,
        }
        logger.debug(
            f"Issued access token for user {user_id}, "
            f"expires {isodatetime.to_timestamp(isodatetime.from_unix(payload['exp']))}"
        )
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def issue_refresh_token(self, user_id: int) -> str:
        """Issue a signed, non-expiring refresh token for ``user_id``."""
        payload = {"id": user_id, "iat": self._clock()}
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    # ------------------------------------------------------------------------
    # Refresh bindings
    # ------------------------------------------------------------------------

    def bind_refresh(self, refresh_token: str, user_id: int) -> None:
        """Remember which user a refresh token was issued to."""
        with self._lock:
            self._refresh_bindings[refresh_token] = user_id

    def lookup_refresh(self, refresh_token: str) -> int | None:
        with self._lock:
            return self._refresh_bindings.get(refresh_token)

    def refresh(self, refresh_token: str, credentials: CredentialStore) -> str:
        """
        Exchange a bound refresh token for a new access token.

        The binding is left untouched, so the same refresh token can be
        used again.

        Raises:
            InvalidToken: If the token is unbound or its user no longer exists
        """
        user_id = self.lookup_refresh(refresh_token)
        if user_id is None:
            logger.warning("Refresh attempted with unknown refresh token")
            raise InvalidToken("Invalid refresh token")

        if not credentials.exists(user_id):
            logger.warning(f"Refresh token bound to missing user {user_id}")
            raise InvalidToken("Invalid refresh token")

        return self.issue_access_token(user_id)

    # ------------------------------------------------------------------------
    # Verification
    # ------------------------------------------------------------------------

    def decode_access_token(self, token: str) -> TokenPayload:
        """
        Verify signature and expiry, then validate the claim shape.

        Raises:
            jwt.InvalidTokenError: On bad signature, malformed token, expiry
                or missing ``exp``
            pydantic.ValidationError: If the claims are not shaped like ours
        """
        payload = jwt.decode(
            token,
            self._secret_key,
            algorithms=[self._algorithm],
            options={"require": ["exp"]},
        )
        return TokenPayload.model_validate(payload)

    def verify_access(self, token: str) -> int:
        """
        Verify an access token and return the user id it carries.

        Raises:
            InvalidToken: On any verification or claim-shape failure
        """
        try:
            payload = self.decode_access_token(token)
        except jwt.ExpiredSignatureError:
            logger.warning("Access token expired")
            raise InvalidToken("Invalid token", {"code": "token_expired"})
        except jwt.InvalidTokenError as e:
            logger.warning(f"Invalid access token: {e}")
            raise InvalidToken("Invalid token", {"code": "invalid_token"})
        except PydanticValidationError:
            logger.warning("Access token claims have unexpected shape")
            raise InvalidToken("Invalid token", {"code": "invalid_claims"})

        return payload.id
