"""Tests for the group repository and service."""

import pytest
from unittest.mock import AsyncMock
from uuid import uuid4

import asyncpg

from neo_access.core.exceptions import ConflictError, ValidationError
from neo_access.core.value_objects import UserId
from neo_access.features.groups import Group, GroupRepository, GroupService


class TestGroupRepository:
    """Test group repository operations."""

    @pytest.fixture
    def repository(self, mock_database_repository):
        return GroupRepository(mock_database_repository)

    @pytest.mark.asyncio
    async def test_insert(self, repository, sample_group_id, group_row, mock_database_repository):
        mock_database_repository.fetchrow.return_value = group_row

        group = await repository.insert(Group(id=sample_group_id, display_name="engineering"))

        assert group.id == sample_group_id
        assert group.display_name == "engineering"
        call_args = mock_database_repository.fetchrow.call_args[0]
        assert "INSERT INTO auth.groups (id, display_name, details, active)" in call_args[0]

    @pytest.mark.asyncio
    async def test_duplicate_display_name(self, repository, sample_group_id, mock_database_repository):
        error = asyncpg.UniqueViolationError("duplicate key")
        error.constraint_name = "groups_display_name_key"
        mock_database_repository.fetchrow.side_effect = error

        with pytest.raises(ConflictError) as exc_info:
            await repository.insert(Group(id=sample_group_id, display_name="engineering"))
        assert exc_info.value.field == "display_name"
        assert exc_info.value.value == "engineering"

    @pytest.mark.asyncio
    async def test_get_by_display_name(self, repository, group_row, mock_database_repository):
        mock_database_repository.fetchrow.return_value = group_row

        group = await repository.get_by_display_name("engineering")

        assert group.display_name == "engineering"
        assert "WHERE display_name = $1" in mock_database_repository.fetchrow.call_args[0][0]

    @pytest.mark.asyncio
    async def test_get_missing(self, repository, sample_group_id, mock_database_repository):
        mock_database_repository.fetchrow.return_value = None
        assert await repository.get(sample_group_id) is None

    @pytest.mark.asyncio
    async def test_rejects_user_id(self, repository):
        with pytest.raises(TypeError):
            await repository.delete(UserId(uuid4()))

    @pytest.mark.asyncio
    async def test_deactivate_and_delete(self, repository, sample_group_id, mock_database_repository):
        mock_database_repository.execute.side_effect = ["UPDATE 1", "DELETE 0"]

        assert await repository.deactivate(sample_group_id) is True
        assert await repository.delete(sample_group_id) is False

        first, second = mock_database_repository.execute.call_args_list
        assert first[0][0].startswith("UPDATE auth.groups SET active = $1")
        assert second[0][0] == "DELETE FROM auth.groups WHERE id = $1"

    @pytest.mark.asyncio
    async def test_set_details(self, repository, sample_group_id, mock_database_repository):
        mock_database_repository.execute.return_value = "UPDATE 1"
        assert await repository.set_details(sample_group_id, ["any", "json"]) is True
        assert mock_database_repository.execute.call_args[0][1] == ["any", "json"]


class TestGroupService:
    """Test group business logic."""

    @pytest.fixture
    def group_repository(self):
        repository = AsyncMock()
        repository.insert.side_effect = lambda group: group
        return repository

    @pytest.mark.asyncio
    async def test_create_group(self, group_repository):
        service = GroupService(group_repository)

        group = await service.create_group("engineering", details={"cost_center": 42})

        assert group.display_name == "engineering"
        assert group.details == {"cost_center": 42}
        group_repository.insert.assert_awaited_once()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", ["", "  ", None])
    async def test_create_group_requires_name(self, group_repository, name):
        with pytest.raises(ValidationError):
            await GroupService(group_repository).create_group(name)

    @pytest.mark.asyncio
    async def test_deactivate_and_delete(self, group_repository, sample_group_id):
        group_repository.deactivate.return_value = False
        group_repository.delete.return_value = True
        service = GroupService(group_repository)

        assert await service.deactivate_group(sample_group_id) is False
        assert await service.delete_group(sample_group_id) is True
