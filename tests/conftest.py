"""Pytest configuration and fixtures for neo-access tests."""

import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock
from uuid import uuid4

from neo_access.core.value_objects import UserId, GroupId


@pytest.fixture
def mock_database_repository():
    """Mock database repository for testing."""
    mock_db = AsyncMock()
    mock_db.fetchrow = AsyncMock()
    mock_db.fetch = AsyncMock(return_value=[])
    mock_db.fetchval = AsyncMock()
    mock_db.execute = AsyncMock()
    return mock_db


@pytest.fixture
def sample_user_id():
    """Sample user ID for testing."""
    return UserId(uuid4())


@pytest.fixture
def sample_group_id():
    """Sample group ID for testing."""
    return GroupId(uuid4())


@pytest.fixture
def user_row(sample_user_id):
    """A row of auth.users as asyncpg would return it."""
    now = datetime.now(timezone.utc)
    return {
        "id": sample_user_id.value,
        "username": "alice",
        "email": "alice@example.com",
        "details": {"team": "platform"},
        "active": True,
        "created_at": now,
        "updated_at": now,
    }


@pytest.fixture
def group_row(sample_group_id):
    """A row of auth.groups as asyncpg would return it."""
    now = datetime.now(timezone.utc)
    return {
        "id": sample_group_id.value,
        "display_name": "engineering",
        "details": None,
        "active": True,
        "created_at": now,
        "updated_at": now,
    }
