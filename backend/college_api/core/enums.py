"""Shared enums used across features.

This module provides a single source of truth for enums used in both models and schemas.
"""

from enum import Enum


class UserRole(str, Enum):
    """Roles a user account can hold."""

    ADMIN = "admin"
    FACULTY = "faculty"
    STUDENT = "student"
