"""Pydantic schemas for authentication."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from college_api.core.enums import UserRole


class UserResponse(BaseModel):
    """Schema for user responses (excludes sensitive data)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    display_name: str = Field(..., min_length=1, max_length=128)
    role: UserRole
    profile_id: Optional[int] = None
    is_active: bool
    last_login: Optional[datetime] = None


class Token(BaseModel):
    """Schema for JWT token response."""

    access_token: str
    token_type: str = "bearer"
    user: Optional[UserResponse] = None


class TokenData(BaseModel):
    """Schema for token payload data."""

    email: Optional[str] = None
    user_id: Optional[int] = None
    role: Optional[UserRole] = None


class PasswordChange(BaseModel):
    """Schema for changing the current user's password."""

    current_password: str = Field(..., alias="currentPassword", min_length=1)
    new_password: str = Field(..., alias="newPassword", min_length=6, max_length=128)

    model_config = ConfigDict(populate_by_name=True)


class MessageResponse(BaseModel):
    """Schema for plain success responses."""

    success: bool = True
    message: str
