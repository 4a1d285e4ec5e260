"""
Tests for the authentication service.
"""

from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import HTTPException
from jose import JWTError, jwt

from college_api.core.enums import UserRole
from college_api.features.auth.service import AuthService
from tests.conftest import TEST_JWT_SECRET, make_user


@pytest.fixture
def mock_db():
    """Mock database session."""
    db = AsyncMock()
    db.commit = AsyncMock()
    db.execute = AsyncMock()
    return db


@pytest.fixture
def service(mock_db):
    """AuthService with a test signing key."""
    auth = AuthService(mock_db)
    auth.settings = auth.settings.model_copy(update={"jwt_secret_key": TEST_JWT_SECRET})
    return auth


def result_with(value):
    """Build an execute() result whose scalar_one_or_none returns ``value``."""
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    return result


class TestTokens:
    """Token creation and verification."""

    def test_user_token_round_trip(self, service):
        """Test the token carries email, id and role."""
        user = make_user(5, UserRole.FACULTY)

        token_data = service.decode_token(service.create_user_token(user))

        assert token_data.email == user.email
        assert token_data.user_id == 5
        assert token_data.role == UserRole.FACULTY

    def test_expired_token_rejected(self, service):
        """Test tokens past their expiry fail verification."""
        token = service.create_access_token(
            {"sub": "a@college.edu", "user_id": 1},
            expires_delta=timedelta(seconds=-5),
        )

        with pytest.raises(JWTError):
            service.decode_token(token)

    def test_token_missing_claims_rejected(self, service):
        """Test a validly signed token without user_id is refused."""
        token = service.create_access_token({"sub": "a@college.edu"})

        with pytest.raises(JWTError):
            service.decode_token(token)

    def test_token_signed_with_other_key_rejected(self, service):
        """Test tokens signed with a different secret are refused."""
        token = jwt.encode(
            {"sub": "a@college.edu", "user_id": 1},
            "another-signing-value-0123456789abcdef",
            algorithm="HS256",
        )

        with pytest.raises(JWTError):
            service.decode_token(token)


class TestPasswords:
    """Password hashing."""

    def test_hash_and_verify(self):
        """Test a hash verifies only its own password."""
        hashed = AuthService.get_password_hash("Registrar#2026")

        assert hashed != "Registrar#2026"
        assert AuthService.verify_password("Registrar#2026", hashed)
        assert not AuthService.verify_password("registrar#2026", hashed)


class TestUserLookup:
    """Authentication against the database."""

    @pytest.mark.asyncio
    async def test_authenticate_user(self, service, mock_db):
        """Test correct credentials return the user."""
        user = make_user(
            1, UserRole.ADMIN, password_hash=AuthService.get_password_hash("Pass#1234")
        )
        mock_db.execute.return_value = result_with(user)

        assert await service.authenticate_user(user.email, "Pass#1234") is user
        assert await service.authenticate_user(user.email, "wrong") is None

    @pytest.mark.asyncio
    async def test_authenticate_unknown_email(self, service, mock_db):
        """Test unknown users fail authentication."""
        mock_db.execute.return_value = result_with(None)

        assert await service.authenticate_user("ghost@college.edu", "x") is None

    @pytest.mark.asyncio
    async def test_get_current_user(self, service, mock_db):
        """Test a valid token resolves to its user."""
        user = make_user(3, UserRole.STUDENT)
        mock_db.execute.return_value = result_with(user)

        assert await service.get_current_user(service.create_user_token(user)) is user

    @pytest.mark.asyncio
    async def test_get_current_user_unknown(self, service, mock_db):
        """Test a token for a deleted user is rejected."""
        user = make_user(3, UserRole.STUDENT)
        mock_db.execute.return_value = result_with(None)

        with pytest.raises(HTTPException) as exc_info:
            await service.get_current_user(service.create_user_token(user))

        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_get_current_user_bad_token(self, service, mock_db):
        """Test an unverifiable token never reaches the database."""
        with pytest.raises(HTTPException) as exc_info:
            await service.get_current_user("garbage")

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Not authorized, token invalid"
        mock_db.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_last_login(self, service, mock_db):
        """Test login time is stamped and committed."""
        user = make_user(1, UserRole.ADMIN)

        await service.update_last_login(user)

        assert user.last_login is not None
        mock_db.commit.assert_awaited_once()
