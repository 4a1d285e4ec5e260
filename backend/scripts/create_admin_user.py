#!/usr/bin/env python3
"""
Script to create admin user accounts for the College Management API.

Usage:
    # Interactive mode (prompts for input):
    python scripts/create_admin_user.py

    # Environment variables mode:
    ADMIN_EMAIL="admin@college.edu" \
    ADMIN_DISPLAY_NAME="Admin User" \
    ADMIN_PASSWORD="SecurePassword123!" \
    python scripts/create_admin_user.py
"""

import asyncio
import os
import sys
from getpass import getpass

from sqlalchemy import select

from college_api.core.database import db_manager
from college_api.core.enums import UserRole
from college_api.features.auth.models import User
from college_api.features.auth.service import AuthService


def validate_email(email: str) -> bool:
    """Basic email validation."""
    return "@" in email and "." in email.split("@")[1]


def validate_password(password: str) -> tuple[bool, str]:
    """
    Validate password meets security requirements.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if len(password) < 8:
        return False, "Password must be at least 8 characters long"

    if not any(c.islower() for c in password):
        return False, "Password must contain at least one lowercase letter"

    if not any(c.isupper() for c in password):
        return False, "Password must contain at least one uppercase letter"

    if not any(c.isdigit() for c in password):
        return False, "Password must contain at least one digit"

    return True, ""


def get_user_input() -> tuple[str, str, str]:
    """Get user input from environment variables or interactively."""
    print("=== Create Admin User ===\n")

    email = os.getenv("ADMIN_EMAIL")
    display_name = os.getenv("ADMIN_DISPLAY_NAME")
    password = os.getenv("ADMIN_PASSWORD")

    if not email:
        email = input("Admin Email: ").strip()
    if not validate_email(email):
        print("Error: Invalid email address")
        sys.exit(1)

    if not display_name:
        display_name = input("Display Name: ").strip()
        if not display_name:
            print("Error: Display name cannot be empty")
            sys.exit(1)

    if not password:
        password = getpass("Password: ")
        if password != getpass("Confirm Password: "):
            print("Error: Passwords do not match")
            sys.exit(1)

    is_valid, error_msg = validate_password(password)
    if not is_valid:
        print(f"Error: {error_msg}")
        sys.exit(1)

    return email, display_name, password


async def create_admin_user(email: str, display_name: str, password: str) -> None:
    """Create an admin user in the database."""
    try:
        async with db_manager.get_session() as db:
            existing = await db.execute(select(User).where(User.email == email))
            if existing.scalar_one_or_none():
                print(f"\nError: User with email '{email}' already exists")
                sys.exit(1)

            db.add(
                User(
                    email=email,
                    display_name=display_name,
                    password_hash=AuthService.get_password_hash(password),
                    role=UserRole.ADMIN,
                    is_active=True,
                )
            )
            await db.commit()
    finally:
        await db_manager.close()

    print("\nAdmin user created successfully!")
    print(f"   Email: {email}")
    print(f"   Display Name: {display_name}")


async def main() -> None:
    """Main entry point."""
    email, display_name, password = get_user_input()
    await create_admin_user(email, display_name, password)


if __name__ == "__main__":
    asyncio.run(main())
