"""Fixtures for tests against a real PostgreSQL database.

Set ``TEST_DATABASE_URL`` to a database the tests may freely create and drop
the ``auth`` schema in.
"""

import os

import pytest_asyncio

from neo_access.database import DatabaseManager, init_schema, drop_schema
from neo_access.services import AccessServices

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL")


@pytest_asyncio.fixture
async def database():
    """A database with a freshly initialized auth schema."""
    manager = DatabaseManager(TEST_DATABASE_URL, min_size=1, max_size=4)
    await drop_schema(manager)
    await init_schema(manager)
    yield manager
    await drop_schema(manager)
    await manager.close_pool()


@pytest_asyncio.fixture
async def services(database):
    return AccessServices.from_database(database)
