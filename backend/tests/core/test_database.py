"""
Tests for the database session manager.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from college_api.core.database import DatabaseManager

DB_URL = "postgresql+asyncpg://registrar:pw@db:5432/college"


def manager_with_session(session):
    """Manager whose session factory yields ``session``."""
    manager = DatabaseManager(DB_URL)
    context = MagicMock()
    context.__aenter__ = AsyncMock(return_value=session)
    context.__aexit__ = AsyncMock(return_value=False)
    manager._session_factory = MagicMock(return_value=context)
    return manager


class TestDatabaseManager:
    """Test class for DatabaseManager."""

    def test_engine_is_not_created_on_construction(self):
        """Test building a manager does not touch the database."""
        manager = DatabaseManager(DB_URL)

        assert manager.database_url == DB_URL
        assert manager._engine is None

    @pytest.mark.asyncio
    async def test_session_is_yielded(self):
        """Test get_session hands out the factory's session."""
        session = AsyncMock()
        manager = manager_with_session(session)

        async with manager.get_session() as db:
            assert db is session

        session.rollback.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_rollback_on_error(self):
        """Test a failing caller rolls the session back and re-raises."""
        session = AsyncMock()
        manager = manager_with_session(session)

        with pytest.raises(RuntimeError):
            async with manager.get_session():
                raise RuntimeError("constraint violated")

        session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_close_without_engine(self):
        """Test closing an unused manager is a no-op."""
        manager = DatabaseManager(DB_URL)
        await manager.close()

        assert manager._engine is None
