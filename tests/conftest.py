"""Shared test fixtures for todo-core."""

import pytest

from todo_core.config import Settings
from todo_core.main import create_app
from todo_core.store import Stores

TEST_SECRET = "test-secret-key-for-todo-core-suite"


@pytest.fixture
def test_settings():
    """Settings with a known secret and the cheapest bcrypt cost."""
    return Settings(
        _env_file=None,
        jwt_secret_key=TEST_SECRET,
        bcrypt_work_factor=4,
        seed_demo_users=False,
    )


@pytest.fixture
def stores(test_settings):
    """Fresh, empty stores for each test."""
    return Stores.from_settings(test_settings)


@pytest.fixture
def credentials(stores):
    return stores.credentials


@pytest.fixture
def tokens(stores):
    return stores.tokens


@pytest.fixture
def todos(stores):
    return stores.todos


@pytest.fixture
def app(test_settings, stores):
    """Flask app wired to the per-test stores."""
    app = create_app(test_settings, stores)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    """Create test client for API testing."""
    with app.test_client() as client:
        yield client


@pytest.fixture
def login_as(client):
    """Sign up (if needed) and log in, returning ids, tokens and auth headers.

    Usage: ``alice = login_as("alice", "pw1")``
    """
    def _login_as(username: str, password: str) -> dict:
        signup = client.post("/signup", json={"username": username, "password": password})
        assert signup.status_code in (201, 400)

        response = client.post("/login", json={"username": username, "password": password})
        assert response.status_code == 200
        data = response.get_json()

        user_id = signup.get_json()["id"] if signup.status_code == 201 else None
        return {
            "id": user_id,
            "token": data["token"],
            "refresh_token": data["refreshToken"],
            "headers": {"Authorization": f"Bearer {data['token']}"},
        }

    return _login_as


@pytest.fixture
def alice(login_as):
    """Logged-in user 'alice' (id 1 in a fresh app)."""
    return login_as("alice", "pw1")


@pytest.fixture
def bob(login_as):
    """Logged-in user 'bob'."""
    return login_as("bob", "pw2")


@pytest.fixture
def auth_headers(alice):
    """Authorization header for alice."""
    return alice["headers"]
