"""Tests for the audit sink."""

import asyncpg
import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock
from uuid import uuid4

from neo_access.core.value_objects import GroupId, PageWindow
from neo_access.features.audit import AuditEntry, AuditRepository, AuditService


class TestAuditRepository:
    """Test audit repository operations."""

    @pytest.fixture
    def repository(self, mock_database_repository):
        return AuditRepository(mock_database_repository)

    @pytest.mark.asyncio
    async def test_append_resolves_attribution_in_statement(self, repository, sample_user_id,
                                                            mock_database_repository):
        occurred_at = datetime.now(timezone.utc)
        entry = AuditEntry(uuid4(), sample_user_id, {"type": "user.login"}, occurred_at)
        mock_database_repository.fetchrow.return_value = {
            "id": entry.id,
            "user_id": None,
            "action": {"type": "user.login"},
            "occurred_at": occurred_at,
        }

        stored = await repository.append(entry)

        assert stored.user_id is None
        call_args = mock_database_repository.fetchrow.call_args[0]
        assert "INSERT INTO auth.log" in call_args[0]
        assert "(SELECT id FROM auth.users WHERE id = $2)" in call_args[0]
        assert call_args[1:] == (entry.id, sample_user_id.value, {"type": "user.login"}, occurred_at)

    @pytest.mark.asyncio
    async def test_append_unattributed(self, repository, mock_database_repository):
        entry = AuditEntry(uuid4(), None, "system.start", datetime.now(timezone.utc))
        mock_database_repository.fetchrow.return_value = {
            "id": entry.id, "user_id": None, "action": "system.start", "occurred_at": entry.occurred_at,
        }

        await repository.append(entry)

        assert mock_database_repository.fetchrow.call_args[0][2] is None

    @pytest.mark.asyncio
    async def test_append_user_deleted_before_foreign_key_check(self, repository, sample_user_id,
                                                              mock_database_repository):
        entry = AuditEntry(uuid4(), sample_user_id, {"type": "group.left"}, datetime.now(timezone.utc))
        mock_database_repository.fetchrow.side_effect = [
            asyncpg.ForeignKeyViolationError("violates foreign key constraint \"log_user_id_fkey\""),
            {
                "id": entry.id,
                "user_id": None,
                "action": {"type": "group.left"},
                "occurred_at": entry.occurred_at,
            },
        ]

        stored = await repository.append(entry)

        assert stored.user_id is None
        assert mock_database_repository.fetchrow.await_count == 2
        retry_args = mock_database_repository.fetchrow.call_args_list[1][0]
        assert retry_args[1:] == (entry.id, None, {"type": "group.left"}, entry.occurred_at)

    @pytest.mark.asyncio
    async def test_list_for_user_newest_first(self, repository, sample_user_id, mock_database_repository):
        await repository.list_for_user(sample_user_id, PageWindow(limit=5))

        call_args = mock_database_repository.fetch.call_args[0]
        assert "ORDER BY occurred_at DESC, id DESC LIMIT $2 OFFSET $3" in call_args[0]
        assert call_args[1:] == (sample_user_id.value, 5, 0)


class TestAuditService:
    """Test audit business logic."""

    @pytest.fixture
    def audit_repository(self):
        repository = AsyncMock()
        repository.append.side_effect = lambda entry: entry
        return repository

    @pytest.mark.asyncio
    async def test_record_generates_id_and_timestamp(self, audit_repository, sample_user_id):
        service = AuditService(audit_repository)

        entry = await service.record(sample_user_id, {"type": "group.left"})

        assert entry.id.version == 7
        assert entry.user_id == sample_user_id
        assert entry.occurred_at.tzinfo is not None
        assert entry.action == {"type": "group.left"}

    @pytest.mark.asyncio
    async def test_record_without_user(self, audit_repository):
        entry = await AuditService(audit_repository).record(None, {"type": "system"})
        assert entry.user_id is None

    @pytest.mark.asyncio
    async def test_record_rejects_group_attribution(self, audit_repository):
        with pytest.raises(TypeError):
            await AuditService(audit_repository).record(GroupId(uuid4()), {})

    @pytest.mark.asyncio
    async def test_events_for(self, audit_repository, sample_user_id):
        audit_repository.list_for_user.return_value = []
        await AuditService(audit_repository).events_for(sample_user_id)
        audit_repository.list_for_user.assert_awaited_once_with(sample_user_id, None)
