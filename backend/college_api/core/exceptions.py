"""Service-level exceptions mapped to HTTP responses by the error handlers."""

from typing import Any, Dict, Optional

from fastapi import status


class ServiceException(Exception):
    """Base exception for service-layer failures."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class NotFoundError(ServiceException):
    """Requested resource does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class AuthenticationError(ServiceException):
    """Credentials are missing, invalid or expired."""

    status_code = status.HTTP_401_UNAUTHORIZED


class AuthorizationError(ServiceException):
    """Authenticated user lacks permission for the resource."""

    status_code = status.HTTP_403_FORBIDDEN


class ValidationError(ServiceException):
    """Input failed a business-rule check."""

    status_code = status.HTTP_400_BAD_REQUEST


class DatabaseError(ServiceException):
    """Database operation failed."""

    status_code = status.HTTP_400_BAD_REQUEST
