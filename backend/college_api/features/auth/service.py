"""Authentication service for user lookup, password checks and JWT tokens."""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from college_api.core.config import get_global_settings
from college_api.core.database import get_db
from .models import User
from .schemas import TokenData

logger = structlog.get_logger(__name__)

# Password hashing context using Argon2id
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")

# OAuth2 scheme for token authentication
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")


class AuthService:
    """Service for authentication operations."""

    def __init__(self, db: Optional[AsyncSession]):
        """Initialize auth service."""
        self.db = db
        self.settings = get_global_settings()

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash."""
        return pwd_context.verify(plain_password, hashed_password)

    @staticmethod
    def get_password_hash(password: str) -> str:
        """Hash a password using Argon2id."""
        return pwd_context.hash(password)

    async def get_user_by_email(self, email: str) -> Optional[User]:
        """Get a user by email address."""
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def get_user_by_id(self, user_id: int) -> Optional[User]:
        """Get a user by ID."""
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def authenticate_user(self, email: str, password: str) -> Optional[User]:
        """Authenticate a user with email and password."""
        user = await self.get_user_by_email(email)
        if not user:
            return None
        if not self.verify_password(password, user.password_hash):
            return None
        return user

    async def update_last_login(self, user: User) -> None:
        """Update the user's last login timestamp."""
        user.last_login = datetime.now(timezone.utc)
        await self.db.commit()

    async def change_password(
        self, user: User, current_password: str, new_password: str
    ) -> bool:
        """Replace the user's password if ``current_password`` matches.

        Returns False, leaving the stored hash untouched, on a mismatch.
        """
        if not self.verify_password(current_password, user.password_hash):
            return False
        user.password_hash = self.get_password_hash(new_password)
        await self.db.commit()
        return True

    def create_access_token(
        self, data: Dict[str, Any], expires_delta: Optional[timedelta] = None
    ) -> str:
        """Create a JWT access token."""
        to_encode = data.copy()

        if expires_delta is None:
            expires_delta = timedelta(
                minutes=self.settings.jwt_access_token_expire_minutes
            )
        to_encode.update({"exp": datetime.now(timezone.utc) + expires_delta})

        return jwt.encode(
            to_encode,
            self.settings.jwt_secret_key,
            algorithm=self.settings.jwt_algorithm,
        )

    def create_user_token(self, user: User) -> str:
        """Create an access token identifying ``user``."""
        return self.create_access_token(
            data={
                "sub": user.email,
                "user_id": user.id,
                "role": getattr(user.role, "value", user.role),
            }
        )

    def decode_token(self, token: str) -> TokenData:
        """Verify a token and return its payload.

        :raises JWTError: If the token is malformed, expired or incomplete
        """
        payload = jwt.decode(
            token,
            self.settings.jwt_secret_key,
            algorithms=[self.settings.jwt_algorithm],
        )
        email = payload.get("sub")
        user_id = payload.get("user_id")
        if email is None or user_id is None:
            raise JWTError("Token is missing required claims")
        return TokenData(email=email, user_id=user_id, role=payload.get("role"))

    async def get_current_user(self, token: str) -> User:
        """Get the current authenticated user from JWT token."""
        credentials_exception = HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authorized, token invalid",
            headers={"WWW-Authenticate": "Bearer"},
        )

        try:
            token_data = self.decode_token(token)
        except JWTError as e:
            logger.warning("Token verification failed", error=str(e))
            raise credentials_exception

        user = await self.get_user_by_id(token_data.user_id)
        if user is None:
            logger.warning("Token refers to unknown user", user_id=token_data.user_id)
            raise credentials_exception

        return user


def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    """Dependency to get auth service instance."""
    return AuthService(db)
