"""Tests for the scoped role-grant engine."""

import pytest
from unittest.mock import AsyncMock
from uuid import uuid4

import asyncpg

from neo_access.core.exceptions import UnknownPrincipalError, ValidationError
from neo_access.core.value_objects import GroupId, UserId
from neo_access.features.grants import (
    GLOBAL_SCOPE,
    RoleGrant,
    RoleGrantRepository,
    RoleGrantService,
    Scope,
)


class TestRoleGrantRepository:
    """Test role grant repository operations."""

    @pytest.fixture
    def repository(self, mock_database_repository):
        return RoleGrantRepository(mock_database_repository)

    @pytest.mark.asyncio
    async def test_insert_user_grant_ignores_duplicates(self, repository, sample_user_id,
                                                        mock_database_repository):
        mock_database_repository.execute.return_value = "INSERT 0 1"

        inserted = await repository.insert(sample_user_id, Scope("project", "P7"), "editor")

        assert inserted is True
        call_args = mock_database_repository.execute.call_args[0]
        assert call_args[0] == (
            "INSERT INTO auth.role_grants (user_id, scope_kind, scope_id, role_name) "
            "VALUES ($1, $2, $3, $4) ON CONFLICT DO NOTHING"
        )
        assert call_args[1:] == (sample_user_id.value, "project", "P7", "editor")

    @pytest.mark.asyncio
    async def test_insert_group_grant_uses_group_column(self, repository, sample_group_id,
                                                        mock_database_repository):
        mock_database_repository.execute.return_value = "INSERT 0 0"

        inserted = await repository.insert(sample_group_id, GLOBAL_SCOPE, "auditor")

        assert inserted is False
        assert "(group_id, scope_kind, scope_id, role_name)" in mock_database_repository.execute.call_args[0][0]

    @pytest.mark.asyncio
    async def test_insert_unknown_principal(self, repository, sample_group_id, mock_database_repository):
        mock_database_repository.execute.side_effect = asyncpg.ForeignKeyViolationError("fk")

        with pytest.raises(UnknownPrincipalError) as exc_info:
            await repository.insert(sample_group_id, GLOBAL_SCOPE, "auditor")
        assert exc_info.value.entity_type == "group"

    @pytest.mark.asyncio
    async def test_delete(self, repository, sample_user_id, mock_database_repository):
        mock_database_repository.execute.return_value = "DELETE 0"

        assert await repository.delete(sample_user_id, GLOBAL_SCOPE, "admin") is False
        assert mock_database_repository.execute.call_args[0][0] == (
            "DELETE FROM auth.role_grants "
            "WHERE user_id = $1 AND scope_kind = $2 AND scope_id = $3 AND role_name = $4"
        )

    @pytest.mark.asyncio
    async def test_list_for_orders_by_scope_then_role(self, repository, sample_user_id,
                                                      mock_database_repository):
        mock_database_repository.fetch.return_value = [
            {"scope_kind": "global", "scope_id": "global", "role_name": "admin"},
            {"scope_kind": "project", "scope_id": "P7", "role_name": "editor"},
        ]

        grants = await repository.list_for(sample_user_id)

        assert grants == [
            RoleGrant(sample_user_id, GLOBAL_SCOPE, "admin"),
            RoleGrant(sample_user_id, Scope("project", "P7"), "editor"),
        ]
        query = mock_database_repository.fetch.call_args[0][0]
        assert query.endswith("ORDER BY scope_kind ASC, scope_id ASC, role_name ASC")

    @pytest.mark.asyncio
    async def test_roles_in_scope(self, repository, sample_group_id, mock_database_repository):
        mock_database_repository.fetch.return_value = [{"role_name": "a"}, {"role_name": "b"}]

        roles = await repository.roles_in_scope(sample_group_id, Scope("project", "P7"))

        assert roles == ["a", "b"]
        call_args = mock_database_repository.fetch.call_args[0]
        assert call_args[0] == (
            "SELECT role_name FROM auth.role_grants "
            "WHERE group_id = $1 AND scope_kind = $2 AND scope_id = $3 ORDER BY role_name ASC"
        )

    @pytest.mark.asyncio
    async def test_exists_effective_is_single_query(self, repository, sample_user_id,
                                                    mock_database_repository):
        mock_database_repository.fetchval.return_value = True

        assert await repository.exists_effective(sample_user_id, Scope("project", "P7"), "editor")

        mock_database_repository.fetchval.assert_awaited_once()
        call_args = mock_database_repository.fetchval.call_args[0]
        assert "auth.group_memberships" in call_args[0]
        assert "g.active" in call_args[0]
        assert call_args[1:] == (sample_user_id.value, "project", "P7", "editor")

    @pytest.mark.asyncio
    async def test_rejects_non_principal(self, repository):
        with pytest.raises(TypeError):
            await repository.exists(uuid4(), GLOBAL_SCOPE, "admin")


class TestRoleGrantService:
    """Test the authorization core."""

    @pytest.fixture
    def role_grant_repository(self):
        return AsyncMock()

    @pytest.fixture
    def service(self, role_grant_repository):
        return RoleGrantService(role_grant_repository)

    @pytest.mark.asyncio
    async def test_allow_twice_never_errors(self, service, role_grant_repository, sample_user_id):
        role_grant_repository.insert.side_effect = [True, False]

        await service.allow(sample_user_id, "project", "P7", "editor")
        await service.allow(sample_user_id, "project", "P7", "editor")

        assert role_grant_repository.insert.await_count == 2

    @pytest.mark.asyncio
    async def test_revoke_absent_never_errors(self, service, role_grant_repository, sample_user_id):
        role_grant_repository.delete.return_value = False
        await service.revoke(sample_user_id, "project", "P7", "editor")
        role_grant_repository.delete.assert_awaited_once_with(
            sample_user_id, Scope("project", "P7"), "editor"
        )

    @pytest.mark.asyncio
    async def test_global_wrappers_delegate_with_reserved_scope(self, service, role_grant_repository,
                                                                sample_user_id):
        role_grant_repository.insert.return_value = True
        role_grant_repository.delete.return_value = True
        role_grant_repository.exists.return_value = True
        role_grant_repository.roles_in_scope.return_value = ["admin"]

        await service.allow_global(sample_user_id, "admin")
        await service.revoke_global(sample_user_id, "admin")
        assert await service.has_global_role(sample_user_id, "admin") is True
        assert await service.global_roles(sample_user_id) == ["admin"]

        role_grant_repository.insert.assert_awaited_once_with(sample_user_id, GLOBAL_SCOPE, "admin")
        role_grant_repository.delete.assert_awaited_once_with(sample_user_id, GLOBAL_SCOPE, "admin")
        role_grant_repository.exists.assert_awaited_once_with(sample_user_id, GLOBAL_SCOPE, "admin")
        role_grant_repository.roles_in_scope.assert_awaited_once_with(sample_user_id, GLOBAL_SCOPE)

    @pytest.mark.asyncio
    async def test_explicit_global_scope_is_the_same_call(self, service, role_grant_repository,
                                                          sample_group_id):
        role_grant_repository.insert.return_value = True

        await service.allow(sample_group_id, "global", "global", "admin")
        await service.allow_global(sample_group_id, "admin")

        first, second = role_grant_repository.insert.await_args_list
        assert first == second

    @pytest.mark.asyncio
    @pytest.mark.parametrize("scope_kind, scope_id, role", [
        ("", "P7", "editor"),
        ("project", "", "editor"),
        ("project", "P7", ""),
        ("project", "P7", None),
    ])
    async def test_rejects_empty_names(self, service, role_grant_repository, sample_user_id,
                                       scope_kind, scope_id, role):
        with pytest.raises(ValidationError):
            await service.allow(sample_user_id, scope_kind, scope_id, role)
        role_grant_repository.insert.assert_not_called()

    @pytest.mark.asyncio
    async def test_rejects_non_principal(self, service):
        with pytest.raises(TypeError):
            await service.roles(str(uuid4()))

    @pytest.mark.asyncio
    async def test_has_effective_role_requires_user(self, service, sample_group_id):
        with pytest.raises(TypeError):
            await service.has_effective_role(sample_group_id, "project", "P7", "editor")

    @pytest.mark.asyncio
    async def test_has_effective_role(self, service, role_grant_repository, sample_user_id):
        role_grant_repository.exists_effective.return_value = True
        assert await service.has_effective_role(sample_user_id, "project", "P7", "editor") is True
        role_grant_repository.exists_effective.assert_awaited_once_with(
            sample_user_id, Scope("project", "P7"), "editor"
        )
