"""Authentication router with login and current-user endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordRequestForm
import structlog

from college_api.core.enums import UserRole
from college_api.core.rate_limiter import limiter
from .dependencies import get_current_active_user
from .models import User
from .schemas import MessageResponse, PasswordChange, Token, UserResponse
from .service import AuthService, get_auth_service

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post("/login", response_model=Token)
@limiter.limit("5/minute")
async def login(
    request: Request,
    form_data: OAuth2PasswordRequestForm = Depends(),
    auth_service: AuthService = Depends(get_auth_service),
) -> Token:
    """Login endpoint using OAuth2 password flow.

    Authenticates user with email and password, returns JWT access token.
    Updates last_login timestamp on successful authentication.
    """
    user = await auth_service.authenticate_user(form_data.username, form_data.password)

    if not user:
        logger.warning("Failed login attempt", email=form_data.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is deactivated",
        )

    access_token = auth_service.create_user_token(user)
    await auth_service.update_last_login(user)
    logger.info("User logged in", user_id=user.id, role=UserRole(user.role).value)

    return Token(
        access_token=access_token,
        token_type="bearer",  # nosec B106
        user=UserResponse.model_validate(user),
    )


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    current_user: User = Depends(get_current_active_user),
) -> User:
    """Get current authenticated user information."""
    return current_user


@router.put("/password", response_model=MessageResponse)
async def change_password(
    payload: PasswordChange,
    current_user: User = Depends(get_current_active_user),
    auth_service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    """Change the authenticated user's password."""
    changed = await auth_service.change_password(
        current_user, payload.current_password, payload.new_password
    )
    if not changed:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Current password is incorrect",
        )

    logger.info("Password changed", user_id=current_user.id)
    return MessageResponse(message="Password changed successfully")
