"""Authentication feature module."""

from .models import User
from .schemas import UserResponse, Token, TokenData, PasswordChange, MessageResponse
from .router import router as auth_router
from .service import AuthService, get_auth_service
from .dependencies import (
    get_current_user,
    get_current_active_user,
    get_current_admin_user,
    require_roles,
)
from .ownership import get_faculty_course_ids, faculty_owns_course, faculty_owns_exam

__all__ = [
    "User",
    "UserResponse",
    "Token",
    "TokenData",
    "PasswordChange",
    "MessageResponse",
    "auth_router",
    "AuthService",
    "get_auth_service",
    "get_current_user",
    "get_current_active_user",
    "get_current_admin_user",
    "require_roles",
    "get_faculty_course_ids",
    "faculty_owns_course",
    "faculty_owns_exam",
]
