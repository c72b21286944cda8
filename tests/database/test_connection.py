"""Tests for the database manager."""

import pytest
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock

import asyncpg

from neo_access.config import AccessSettings
from neo_access.core.exceptions import StorageUnavailableError
from neo_access.database.connection import DatabaseManager, affected_rows


def fake_pool(connection=None, acquire_error=None):
    pool = MagicMock()
    pool.close = AsyncMock()

    @asynccontextmanager
    async def acquire():
        if acquire_error is not None:
            raise acquire_error
        yield connection

    pool.acquire = acquire
    return pool


class TestDatabaseManager:
    """Pool creation and fault translation."""

    def test_from_settings(self):
        settings = AccessSettings(
            _env_file=None,
            database_url="postgresql+asyncpg://u:p@db/access",
            db_pool_max_size=5,
        )
        manager = DatabaseManager.from_settings(settings)
        assert manager.dsn == "postgresql://u:p@db/access"
        assert manager.pool_config["max_size"] == 5
        assert manager.application_name == settings.app_name

    @pytest.mark.asyncio
    async def test_create_pool_once(self, mocker):
        pool = fake_pool()
        create_pool = mocker.patch("asyncpg.create_pool", AsyncMock(return_value=pool))
        manager = DatabaseManager("postgresql://localhost/test")

        assert await manager.create_pool() is pool
        assert await manager.create_pool() is pool
        create_pool.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unreachable_store_is_storage_unavailable(self, mocker):
        mocker.patch("asyncpg.create_pool", AsyncMock(side_effect=ConnectionRefusedError("refused")))
        manager = DatabaseManager("postgresql://localhost/test")

        with pytest.raises(StorageUnavailableError):
            await manager.create_pool()

    @pytest.mark.asyncio
    async def test_timeouts_pass_through(self, mocker):
        mocker.patch("asyncpg.create_pool", AsyncMock(side_effect=TimeoutError()))
        manager = DatabaseManager("postgresql://localhost/test")

        with pytest.raises(TimeoutError):
            await manager.create_pool()

    @pytest.mark.asyncio
    async def test_lost_connection_is_storage_unavailable(self):
        manager = DatabaseManager("postgresql://localhost/test")
        manager.pool = fake_pool(acquire_error=asyncpg.exceptions.ConnectionDoesNotExistError("gone"))

        with pytest.raises(StorageUnavailableError):
            await manager.fetchval("SELECT 1")

    @pytest.mark.asyncio
    async def test_query_errors_propagate_unchanged(self):
        connection = AsyncMock()
        connection.fetchrow.side_effect = asyncpg.UndefinedTableError("missing")
        manager = DatabaseManager("postgresql://localhost/test")
        manager.pool = fake_pool(connection)

        with pytest.raises(asyncpg.UndefinedTableError):
            await manager.fetchrow("SELECT * FROM auth.users")

    @pytest.mark.asyncio
    async def test_execute_returns_status(self):
        connection = AsyncMock()
        connection.execute.return_value = "DELETE 1"
        manager = DatabaseManager("postgresql://localhost/test")
        manager.pool = fake_pool(connection)

        assert await manager.execute("DELETE FROM auth.users WHERE id = $1", 1) == "DELETE 1"
        connection.execute.assert_awaited_once_with("DELETE FROM auth.users WHERE id = $1", 1, timeout=None)

    @pytest.mark.asyncio
    async def test_health_check_reports_unavailable(self):
        manager = DatabaseManager("postgresql://localhost/test")
        manager.pool = fake_pool(acquire_error=ConnectionResetError("reset"))
        assert await manager.health_check() is False

    @pytest.mark.asyncio
    async def test_close_pool(self):
        manager = DatabaseManager("postgresql://localhost/test")
        pool = fake_pool()
        manager.pool = pool
        await manager.close_pool()
        pool.close.assert_awaited_once()
        assert manager.pool is None


@pytest.mark.parametrize("status, expected", [
    ("DELETE 1", 1),
    ("UPDATE 0", 0),
    ("INSERT 0 1", 1),
    ("INSERT 0 0", 0),
    ("", 0),
    (None, 0),
])
def test_affected_rows(status, expected):
    assert affected_rows(status) == expected
