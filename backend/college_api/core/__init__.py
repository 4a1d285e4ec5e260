"""Core infrastructure module.

This module exports core utilities used across features.
"""

from .config import Settings, get_settings, get_global_settings
from .database import get_db, db_manager
from .exceptions import (
    ServiceException,
    NotFoundError,
    AuthenticationError,
    AuthorizationError,
    ValidationError,
    DatabaseError,
)
from .enums import UserRole
from .models import Base

__all__ = [
    # Config
    "Settings",
    "get_settings",
    "get_global_settings",
    # Database
    "get_db",
    "db_manager",
    # Exceptions
    "ServiceException",
    "NotFoundError",
    "AuthenticationError",
    "AuthorizationError",
    "ValidationError",
    "DatabaseError",
    # Enums
    "UserRole",
    # Models
    "Base",
]
