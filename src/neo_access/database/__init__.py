"""Database layer for neo-access."""

from .connection import DatabaseManager, affected_rows, STORAGE_UNAVAILABLE_ERRORS
from .statements import TableSpec, Statement, StatementBuilder, SortOrder, validate_identifier
from .schema import (
    USERS_TABLE,
    GROUPS_TABLE,
    MEMBERSHIPS_TABLE,
    ROLE_GRANTS_TABLE,
    AUDIT_LOG_TABLE,
    init_schema,
    drop_schema,
)

__all__ = [
    "DatabaseManager",
    "affected_rows",
    "STORAGE_UNAVAILABLE_ERRORS",
    "TableSpec",
    "Statement",
    "StatementBuilder",
    "SortOrder",
    "validate_identifier",
    "USERS_TABLE",
    "GROUPS_TABLE",
    "MEMBERSHIPS_TABLE",
    "ROLE_GRANTS_TABLE",
    "AUDIT_LOG_TABLE",
    "init_schema",
    "drop_schema",
]
