"""
Todo API - Test Configuration

Shared fixtures. HTTP tests run against a throwaway SQLite file per test.
"""

from datetime import datetime, timezone, timedelta
from typing import Dict, Optional

import pytest
from fastapi.testclient import TestClient

from todo_api.auth.models import User
from todo_api.auth.repository import DuplicateEmailError, UserRepositoryInterface
from todo_api.auth.tokens import TokenService
from todo_api.config import Settings
from todo_api.main import create_app


TEST_SECRET_KEY = "test-secret-key-with-at-least-32-characters"


class InMemoryUserRepository(UserRepositoryInterface):
    """In-memory user repository for testing."""

    def __init__(self):
        self._users: Dict[str, User] = {}
        self._users_by_email: Dict[str, User] = {}

    async def create(self, user: User) -> User:
        """Create a new user."""
        if user.email in self._users_by_email:
            raise DuplicateEmailError(user.email)
        self._users[user.id] = user
        self._users_by_email[user.email] = user
        return user

    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID."""
        return self._users.get(user_id)

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email."""
        return self._users_by_email.get(email)

    async def exists_by_email(self, email: str) -> bool:
        """Check if email is registered."""
        return email in self._users_by_email

    def count(self) -> int:
        return len(self._users)


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings pointing at a fresh SQLite file."""
    return Settings(
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        JWT_SECRET_KEY=TEST_SECRET_KEY,
    )


@pytest.fixture
def client(settings):
    """Create test client; entering it runs startup (schema creation)."""
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def registered_user(client):
    """Register a test user and return credentials plus the created user."""
    credentials = {
        "name": "Test User",
        "email": "testuser@example.com",
        "password": "testpassword123",
    }
    response = client.post("/api/auth/register", json=credentials)
    return {**credentials, "id": response.json()["user"]["id"]}


@pytest.fixture
def auth_token(client, registered_user):
    """Get an auth token for the registered user."""
    response = client.post(
        "/api/auth/login",
        json={"email": registered_user["email"], "password": registered_user["password"]},
    )
    return response.json()["token"]


@pytest.fixture
def auth_headers(auth_token):
    """Create Authorization headers for authenticated requests."""
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
def second_user(client):
    """Register a second user and return credentials plus the created user."""
    credentials = {
        "name": "Second User",
        "email": "seconduser@example.com",
        "password": "secondpassword123",
    }
    response = client.post("/api/auth/register", json=credentials)
    return {**credentials, "id": response.json()["user"]["id"]}


@pytest.fixture
def second_auth_headers(client, second_user):
    """Authorization headers for the second user."""
    response = client.post(
        "/api/auth/login",
        json={"email": second_user["email"], "password": second_user["password"]},
    )
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def user_repository():
    return InMemoryUserRepository()


# Time control fixtures for deterministic token expiry testing
class FrozenClock:
    """A clock that returns a fixed time for deterministic testing."""

    def __init__(self, frozen_time: datetime):
        self._frozen_time = frozen_time

    def __call__(self) -> datetime:
        return self._frozen_time

    def set(self, new_time: datetime) -> None:
        self._frozen_time = new_time

    def advance(self, delta: timedelta) -> None:
        self._frozen_time += delta


@pytest.fixture
def frozen_now() -> datetime:
    """A fixed 'now' time for testing."""
    return datetime(2025, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def frozen_clock(frozen_now) -> FrozenClock:
    """A controllable clock."""
    return FrozenClock(frozen_now)


@pytest.fixture
def token_service(frozen_clock) -> TokenService:
    """Token service sharing the test signing key, driven by the frozen clock."""
    return TokenService(TEST_SECRET_KEY, clock=frozen_clock)
