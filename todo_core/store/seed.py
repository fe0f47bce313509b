"""Seed the credential store with demo accounts for development."""

import logging

from ..auth.service import CredentialStore
from ..exceptions import DuplicateUsername

logger = logging.getLogger(__name__)

DEMO_USERS = [
    ("user1", "password1"),
    ("user2", "password2"),
]


def seed_demo_users(credentials: CredentialStore) -> int:
    """
    Register the demo users, skipping any that already exist.

    Returns:
        Number of users created
    """
    created = 0
    for username, password in DEMO_USERS:
        try:
            credentials.register(username, password)
            created += 1
        except DuplicateUsername:
            logger.debug(f"Demo user {username} already exists, skipping")

    logger.info(f"Seeded {created} demo user(s)")
    return created
