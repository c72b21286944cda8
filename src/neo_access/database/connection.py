"""
Database connection management using asyncpg for neo-access.

A ``DatabaseManager`` is created by the application at startup and passed to
repositories explicitly. There is no module-level pool.
"""
import asyncio
import json
from typing import Optional, Any, List
from contextlib import asynccontextmanager
import asyncpg
from asyncpg import Pool, Connection, Record
import logging

from ..core.exceptions import StorageUnavailableError

logger = logging.getLogger(__name__)


# Faults meaning "the store could not be reached". TimeoutError is an OSError
# subclass but is re-raised untouched: timeout policy belongs to the caller.
STORAGE_UNAVAILABLE_ERRORS = (
    OSError,
    asyncpg.exceptions.PostgresConnectionError,
    asyncpg.exceptions.ConnectionDoesNotExistError,
    asyncpg.exceptions.CannotConnectNowError,
    asyncpg.exceptions.TooManyConnectionsError,
)


async def _init_connection(connection: Connection) -> None:
    """Decode json/jsonb columns to Python objects on every pooled connection."""
    for type_name in ("json", "jsonb"):
        await connection.set_type_codec(
            type_name,
            encoder=json.dumps,
            decoder=json.loads,
            schema="pg_catalog",
        )


class DatabaseManager:
    """Manages the connection pool to the relational store."""

    def __init__(self, database_url: str, application_name: str = "neo-access", **pool_config):
        """Initialize DatabaseManager.

        Args:
            database_url: PostgreSQL DSN
            application_name: Reported to the server as ``application_name``
            **pool_config: Additional ``asyncpg.create_pool`` options
        """
        self.pool: Optional[Pool] = None
        self.dsn = database_url.replace("+asyncpg", "")
        self.application_name = application_name
        self._pool_lock = asyncio.Lock()

        self.pool_config = {
            "min_size": 2,
            "max_size": 20,
            "max_inactive_connection_lifetime": 300,
            "command_timeout": 60,
            **pool_config
        }

    @classmethod
    def from_settings(cls, settings) -> "DatabaseManager":
        """Build a manager from ``AccessSettings``."""
        return cls(
            settings.database_url,
            application_name=settings.app_name,
            **settings.get_pool_config()
        )

    async def create_pool(self) -> Pool:
        """Create the connection pool if it does not exist yet and return it."""
        if self.pool is not None:
            return self.pool

        async with self._pool_lock:
            if self.pool is None:
                logger.info(f"Creating database pool with size {self.pool_config['max_size']}")
                try:
                    self.pool = await asyncpg.create_pool(
                        self.dsn,
                        server_settings={"application_name": self.application_name},
                        init=_init_connection,
                        **self.pool_config
                    )
                except STORAGE_UNAVAILABLE_ERRORS as e:
                    if isinstance(e, TimeoutError):
                        raise
                    logger.error(f"Failed to create database pool: {e}")
                    raise StorageUnavailableError(str(e)) from e
                logger.info("Database pool created successfully")
        return self.pool

    async def close_pool(self) -> None:
        """Close the connection pool."""
        if self.pool:
            await self.pool.close()
            self.pool = None
            logger.info("Database pool closed")

    @asynccontextmanager
    async def acquire(self):
        """Acquire a connection from the pool.

        Connection-level faults raised while the connection is held surface
        as ``StorageUnavailableError``; every other error propagates unchanged.
        """
        pool = await self.create_pool()
        try:
            async with pool.acquire() as connection:
                yield connection
        except STORAGE_UNAVAILABLE_ERRORS as e:
            if isinstance(e, TimeoutError):
                raise
            logger.error(f"Database unavailable: {e}")
            raise StorageUnavailableError(str(e)) from e

    @asynccontextmanager
    async def transaction(self):
        """Create a transaction context."""
        async with self.acquire() as connection:
            async with connection.transaction():
                yield connection

    async def execute(self, query: str, *args, timeout: float = None) -> str:
        """Execute a statement and return its status tag (e.g. ``DELETE 1``)."""
        async with self.acquire() as connection:
            return await connection.execute(query, *args, timeout=timeout)

    async def fetch(self, query: str, *args, timeout: float = None) -> List[Record]:
        """Fetch multiple rows."""
        async with self.acquire() as connection:
            return await connection.fetch(query, *args, timeout=timeout)

    async def fetchrow(self, query: str, *args, timeout: float = None) -> Optional[Record]:
        """Fetch a single row."""
        async with self.acquire() as connection:
            return await connection.fetchrow(query, *args, timeout=timeout)

    async def fetchval(self, query: str, *args, column: int = 0, timeout: float = None) -> Any:
        """Fetch a single value."""
        async with self.acquire() as connection:
            return await connection.fetchval(query, *args, column=column, timeout=timeout)

    async def health_check(self) -> bool:
        """Check database health."""
        try:
            async with self.acquire() as connection:
                result = await connection.fetchval("SELECT 1")
                return result == 1
        except StorageUnavailableError as e:
            logger.error(f"Database health check failed: {e}")
            return False


def affected_rows(status: str) -> int:
    """Row count from an asyncpg status tag such as ``UPDATE 1``."""
    try:
        return int(status.split()[-1])
    except (AttributeError, IndexError, ValueError):
        return 0
