"""
Test cases for the authentication endpoints.
"""

import pytest

from college_api.core.enums import UserRole
from college_api.features.auth.service import AuthService
from tests.conftest import make_user


@pytest.fixture
def users():
    """Users with real password hashes."""
    password_hash = AuthService.get_password_hash("Campus#2026")
    return {
        1: make_user(1, UserRole.ADMIN, password_hash=password_hash),
        2: make_user(2, UserRole.FACULTY, profile_id=10, password_hash=password_hash),
        4: make_user(4, UserRole.STUDENT, is_active=False, password_hash=password_hash),
    }


class TestLogin:
    """POST /api/auth/login."""

    def test_login_success(self, client, auth_service, users):
        """Test valid credentials return a bearer token and the user."""
        response = client.post(
            "/api/auth/login",
            data={"username": users[2].email, "password": "Campus#2026"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["token_type"] == "bearer"
        assert body["user"]["role"] == "faculty"
        assert body["user"]["profile_id"] == 10
        assert auth_service.decode_token(body["access_token"]).user_id == 2

    def test_login_wrong_password(self, client, users, log_store):
        """Test bad credentials get 401 and leave a warning in the logs."""
        response = client.post(
            "/api/auth/login",
            data={"username": users[1].email, "password": "nope"},
        )

        assert response.status_code == 401
        assert response.json() == {"success": False, "message": "Invalid credentials"}
        assert any(
            e.message == "Failed login attempt" for e in log_store.query(level="warn")
        )

    def test_login_inactive(self, client, users):
        """Test deactivated accounts cannot log in."""
        response = client.post(
            "/api/auth/login",
            data={"username": users[4].email, "password": "Campus#2026"},
        )

        assert response.status_code == 403
        assert response.json()["message"] == "User account is deactivated"

    def test_login_missing_fields(self, client):
        """Test an incomplete form is a 400 with the envelope."""
        response = client.post("/api/auth/login", data={"username": "x@college.edu"})

        assert response.status_code == 400
        assert response.json()["success"] is False
        assert "password" in response.json()["message"]


class TestMe:
    """GET /api/auth/me."""

    def test_me(self, client, auth_headers):
        """Test the current user is returned without the password hash."""
        response = client.get("/api/auth/me", headers=auth_headers(1))

        assert response.status_code == 200
        body = response.json()
        assert body["email"] == "admin1@college.edu"
        assert body["role"] == "admin"
        assert "password_hash" not in body

    def test_me_requires_token(self, client):
        """Test anonymous callers get 401."""
        assert client.get("/api/auth/me").status_code == 401


class TestChangePassword:
    """PUT /api/auth/password."""

    def test_change_password(self, client, auth_headers, auth_service, users):
        """Test the new password replaces the old one."""
        response = client.put(
            "/api/auth/password",
            json={"currentPassword": "Campus#2026", "newPassword": "Library#2027"},
            headers=auth_headers(2),
        )

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Password changed successfully",
        }
        assert AuthService.verify_password("Library#2027", users[2].password_hash)
        assert users[1].password_hash != users[2].password_hash
        auth_service.db.commit.assert_awaited_once()

    def test_wrong_current_password(self, client, auth_headers, auth_service, users):
        """Test a wrong current password is rejected and nothing changes."""
        before = users[1].password_hash

        response = client.put(
            "/api/auth/password",
            json={"currentPassword": "guess", "newPassword": "Library#2027"},
            headers=auth_headers(1),
        )

        assert response.status_code == 401
        assert response.json() == {
            "success": False,
            "message": "Current password is incorrect",
        }
        assert users[1].password_hash == before
        auth_service.db.commit.assert_not_awaited()

    def test_short_new_password(self, client, auth_headers):
        """Test new passwords under six characters are a 400."""
        response = client.put(
            "/api/auth/password",
            json={"currentPassword": "Campus#2026", "newPassword": "abc"},
            headers=auth_headers(1),
        )

        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_requires_token(self, client):
        """Test anonymous callers get 401."""
        response = client.put(
            "/api/auth/password",
            json={"currentPassword": "Campus#2026", "newPassword": "Library#2027"},
        )

        assert response.status_code == 401
