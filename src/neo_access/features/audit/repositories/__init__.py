"""Audit repositories."""

from .audit_repository import AuditRepository

__all__ = ["AuditRepository"]
