"""Audit feature module."""

from .entities import AuditEntry
from .repositories import AuditRepository
from .services import AuditService

__all__ = ["AuditEntry", "AuditRepository", "AuditService"]
