"""
Tests for the JWT token service.

Tests verify that:
- Access tokens carry id/iat/exp and expire after one hour
- Refresh tokens carry id/iat and never expire
- Forged, expired, malformed and oddly-shaped tokens are rejected
- Refresh only works for bound tokens whose user still exists
"""

import jwt as pyjwt
import pytest

from todo_core.auth.service import CredentialStore
from todo_core.auth.token import TokenService
from todo_core.exceptions import InvalidToken
from todo_core.utils import isodatetime

TEST_SECRET = "test-secret-key-for-todo-core-suite"


def _encode(payload: dict, secret: str = TEST_SECRET) -> str:
    return pyjwt.encode(payload, secret, algorithm="HS256")


# ============================================================================
# Issuance Tests
# ============================================================================


class TestIssueAccessToken:
    """Tests for issue_access_token."""

    def test_token_contains_required_claims(self, tokens: TokenService):
        token = tokens.issue_access_token(7)
        payload = pyjwt.decode(token, options={"verify_signature": False})

        assert payload["id"] == 7
        assert isinstance(payload["iat"], int)
        assert isinstance(payload["exp"], int)

    def test_token_expires_one_hour_after_issue(self, tokens: TokenService):
        token = tokens.issue_access_token(7)
        payload = pyjwt.decode(token, options={"verify_signature": False})

        assert payload["exp"] - payload["iat"] == 3600

    def test_token_issued_at_is_current_time(self, tokens: TokenService):
        before = isodatetime.now_unix()
        token = tokens.issue_access_token(7)
        after = isodatetime.now_unix()

        payload = pyjwt.decode(token, options={"verify_signature": False})
        assert before <= payload["iat"] <= after

    def test_token_uses_configured_secret_key(self, tokens: TokenService):
        token = tokens.issue_access_token(7)

        payload = pyjwt.decode(token, TEST_SECRET, algorithms=["HS256"])
        assert payload["id"] == 7

    def test_configured_expiry_is_used(self):
        service = TokenService(TEST_SECRET, access_token_expiry_seconds=60)
        payload = pyjwt.decode(
            service.issue_access_token(1), options={"verify_signature": False}
        )

        assert payload["exp"] - payload["iat"] == 60


class TestIssueRefreshToken:
    """Tests for issue_refresh_token."""

    def test_refresh_token_has_no_expiry(self, tokens: TokenService):
        token = tokens.issue_refresh_token(7)
        payload = pyjwt.decode(token, TEST_SECRET, algorithms=["HS256"])

        assert payload["id"] == 7
        assert "exp" not in payload

    def test_refresh_token_is_not_an_access_token(self, tokens: TokenService):
        """Without exp, a refresh token cannot be used as a bearer token."""
        with pytest.raises(InvalidToken):
            tokens.verify_access(tokens.issue_refresh_token(7))


# ============================================================================
# Verification Tests
# ============================================================================


class TestVerifyAccess:
    """Tests for verify_access."""

    def test_verify_fresh_token(self, tokens: TokenService):
        token = tokens.issue_access_token(7)
        assert tokens.verify_access(token) == 7

    def test_expired_token_rejected(self):
        """A token issued just over an hour ago has expired."""
        past = isodatetime.now_unix() - 3601
        service = TokenService(TEST_SECRET, clock=lambda: past)
        token = service.issue_access_token(7)

        with pytest.raises(InvalidToken) as exc_info:
            service.verify_access(token)

        assert exc_info.value.details["code"] == "token_expired"

    def test_token_just_inside_window_accepted(self):
        recent = isodatetime.now_unix() - 3500
        service = TokenService(TEST_SECRET, clock=lambda: recent)

        assert service.verify_access(service.issue_access_token(7)) == 7

    def test_wrong_secret_rejected(self, tokens: TokenService):
        payload = pyjwt.decode(
            tokens.issue_access_token(7), options={"verify_signature": False}
        )
        forged = _encode(payload, "some-other-secret-of-decent-length")

        with pytest.raises(InvalidToken):
            tokens.verify_access(forged)

    @pytest.mark.parametrize("garbage", ["", "not-a-jwt", "a.b.c"])
    def test_malformed_token_rejected(self, tokens: TokenService, garbage):
        with pytest.raises(InvalidToken):
            tokens.verify_access(garbage)

    @pytest.mark.parametrize(
        "claims",
        [
            {},
            {"id": "7"},
            {"id": 7.5},
            {"id": True},
            {"id": 0},
            {"id": -3},
            {"user": 7},
        ],
    )
    def test_bad_claim_shape_rejected(self, tokens: TokenService, claims):
        """Correctly signed tokens with the wrong payload shape are invalid."""
        now = isodatetime.now_unix()
        token = _encode({**claims, "iat": now, "exp": now + 60})

        with pytest.raises(InvalidToken):
            tokens.verify_access(token)

    def test_invalid_token_message_is_generic(self, tokens: TokenService):
        with pytest.raises(InvalidToken) as exc_info:
            tokens.verify_access("not-a-jwt")

        assert exc_info.value.message == "Invalid token"


# ============================================================================
# Refresh Tests
# ============================================================================


class TestRefresh:
    """Tests for bind_refresh and refresh."""

    def test_unknown_refresh_token_rejected(
        self, tokens: TokenService, credentials: CredentialStore
    ):
        with pytest.raises(InvalidToken) as exc_info:
            tokens.refresh("never-issued", credentials)

        assert exc_info.value.message == "Invalid refresh token"

    def test_signed_but_unbound_refresh_token_rejected(
        self, tokens: TokenService, credentials: CredentialStore
    ):
        user = credentials.register("alice", "pw1")
        refresh_token = tokens.issue_refresh_token(user.id)

        with pytest.raises(InvalidToken):
            tokens.refresh(refresh_token, credentials)

    def test_bound_refresh_token_yields_new_access_token(
        self, tokens: TokenService, credentials: CredentialStore
    ):
        user = credentials.register("alice", "pw1")
        refresh_token = tokens.issue_refresh_token(user.id)
        tokens.bind_refresh(refresh_token, user.id)

        new_token = tokens.refresh(refresh_token, credentials)

        assert tokens.verify_access(new_token) == user.id

    def test_refresh_keeps_binding(self, tokens: TokenService, credentials: CredentialStore):
        """The binding is not rotated; the same refresh token works again."""
        user = credentials.register("alice", "pw1")
        refresh_token = tokens.issue_refresh_token(user.id)
        tokens.bind_refresh(refresh_token, user.id)

        tokens.refresh(refresh_token, credentials)

        assert tokens.lookup_refresh(refresh_token) == user.id
        assert tokens.verify_access(tokens.refresh(refresh_token, credentials)) == user.id

    def test_refresh_for_missing_user_rejected(
        self, tokens: TokenService, credentials: CredentialStore
    ):
        tokens.bind_refresh("orphan-token", 99)

        with pytest.raises(InvalidToken):
            tokens.refresh("orphan-token", credentials)

    def test_bind_overwrites_previous_binding(self, tokens: TokenService):
        tokens.bind_refresh("same-token", 1)
        tokens.bind_refresh("same-token", 2)

        assert tokens.lookup_refresh("same-token") == 2
