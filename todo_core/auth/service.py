"""Credential store: user records and bcrypt password verification.

Users live in memory for the lifetime of the process. They are created on
signup and never updated or deleted, so ids handed out by the counter are
never reissued.
"""

import logging
import threading
from dataclasses import dataclass

import bcrypt

from ..exceptions import AuthFailure, DuplicateUsername

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


@dataclass(frozen=True)
class User:
    """Stored user record."""

    id: int
    username: str
    password_hash: str


# ============================================================================
# Password Hashing
# ============================================================================


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str, work_factor: int = 8) -> str:
    """
    Hash a password with bcrypt using a fresh random salt.

    Args:
        password: Plain text password
        work_factor: bcrypt cost (log2 rounds)

    Returns:
        60-character bcrypt hash string
    """
    salt = bcrypt.gensalt(rounds=work_factor)
    return bcrypt.hashpw(_encode(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """
    Check a password against a bcrypt hash.

    Uses bcrypt.checkpw, which compares in constant time.
    """
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed hash
        return False


# ============================================================================
# Credential Store
# ============================================================================


class CredentialStore:
    """In-memory user registry guarded by a lock."""

    def __init__(self, work_factor: int = 8):
        self._work_factor = work_factor
        self._users: list[User] = []
        self._by_username: dict[str, User] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def register(self, username: str, password: str) -> User:
        """
        Create a new user.

        Args:
            username: Exact username (case-sensitive)
            password: Plain text password

        Returns:
            The stored User

        Raises:
            DuplicateUsername: If the username is already taken
        """
        if self.get_by_username(username) is not None:
            raise DuplicateUsername("Username already exists", {"username": username})

        # Hash outside the lock; it is the slow part
        password_hash = hash_password(password, self._work_factor)

        with self._lock:
            # Re-check: another signup may have won the race while hashing
            if username in self._by_username:
                raise DuplicateUsername("Username already exists", {"username": username})

            user = User(id=self._next_id, username=username, password_hash=password_hash)
            self._next_id += 1
            self._users.append(user)
            self._by_username[username] = user

        logger.info(f"Registered user {user.username} (id={user.id})")
        return user

    def verify(self, username: str, password: str) -> User:
        """
        Verify a username/password pair.

        Raises:
            AuthFailure: If the user is unknown or the password is wrong.
                Both cases produce the same message.
        """
        user = self.get_by_username(username)
        if user is None or not verify_password(password, user.password_hash):
            raise AuthFailure("Invalid username or password")
        return user

    def get_by_username(self, username: str) -> User | None:
        with self._lock:
            return self._by_username.get(username)

    def get(self, user_id: int) -> User | None:
        """Look up a user by id."""
        with self._lock:
            for user in self._users:
                if user.id == user_id:
                    return user
        return None

    def exists(self, user_id: int) -> bool:
        return self.get(user_id) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)
