"""Authentication dependencies for protecting routes."""

from typing import Callable, Coroutine, Any

from fastapi import Depends, HTTPException, status

from college_api.core.enums import UserRole
from .models import User
from .service import AuthService, get_auth_service, oauth2_scheme


async def get_current_user(
    token: str = Depends(oauth2_scheme),
    auth_service: AuthService = Depends(get_auth_service),
) -> User:
    """Get the current authenticated user."""
    return await auth_service.get_current_user(token)


async def get_current_active_user(
    current_user: User = Depends(get_current_user),
) -> User:
    """Get the current active user (not disabled)."""
    if not current_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User account is deactivated",
        )
    return current_user


def require_roles(*roles: UserRole) -> Callable[..., Coroutine[Any, Any, User]]:
    """Build a dependency that only admits users holding one of ``roles``."""
    allowed = {UserRole(role) for role in roles}

    async def _check_role(current_user: User = Depends(get_current_active_user)) -> User:
        role = UserRole(current_user.role)
        if role not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Role '{role.value}' is not authorized to access this resource",
            )
        return current_user

    return _check_role


get_current_admin_user = require_roles(UserRole.ADMIN)
