"""Shared fixtures for the College Management API tests."""

from typing import Dict, Optional
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from college_api.core.config import Settings
from college_api.core.enums import UserRole
from college_api.core.rate_limiter import limiter
from college_api.features.auth.models import User
from college_api.features.auth.service import AuthService, get_auth_service
from college_api.features.logs.store import LogStore
from college_api.main import create_app

TEST_JWT_SECRET = "test-jwt-signing-value-0123456789abcdef"


class FakeAuthService(AuthService):
    """AuthService backed by an in-memory user table instead of a database."""

    def __init__(self, users: Dict[int, User]):
        super().__init__(db=AsyncMock())
        self.settings = Settings(jwt_secret_key=TEST_JWT_SECRET)
        self.users = users

    async def get_user_by_id(self, user_id: int) -> Optional[User]:
        return self.users.get(user_id)

    async def get_user_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.email == email), None)

    async def update_last_login(self, user: User) -> None:
        pass


def make_user(user_id: int, role: UserRole, **overrides) -> User:
    """Build a detached User instance."""
    fields = {
        "id": user_id,
        "email": f"{role.value}{user_id}@college.edu",
        "display_name": f"{role.value.title()} {user_id}",
        "password_hash": "not-a-real-hash",
        "role": role,
        "profile_id": None,
        "is_active": True,
    }
    fields.update(overrides)
    return User(**fields)


@pytest.fixture
def users() -> Dict[int, User]:
    """One active user per role plus a deactivated admin."""
    return {
        1: make_user(1, UserRole.ADMIN),
        2: make_user(2, UserRole.FACULTY, profile_id=10),
        3: make_user(3, UserRole.STUDENT, profile_id=20),
        4: make_user(4, UserRole.ADMIN, is_active=False),
    }


@pytest.fixture
def auth_service(users) -> FakeAuthService:
    """Fake auth service over the ``users`` table."""
    return FakeAuthService(users)


@pytest.fixture
def log_store() -> LogStore:
    """A fresh, empty log store."""
    return LogStore()


@pytest.fixture
def app(log_store, auth_service):
    """Application wired to the test log store and fake auth service."""
    limiter.reset()
    application = create_app(
        settings=Settings(jwt_secret_key=TEST_JWT_SECRET),
        log_store=log_store,
    )
    application.dependency_overrides[get_auth_service] = lambda: auth_service
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app):
    """Test client that returns 500 responses instead of raising."""
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(auth_service, users):
    """Build bearer headers for a user id."""

    def _headers(user_id: int) -> Dict[str, str]:
        token = auth_service.create_user_token(users[user_id])
        return {"Authorization": f"Bearer {token}"}

    return _headers
