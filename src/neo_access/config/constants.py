"""Constants and enums for neo-access.

These values mirror the objects created by ``neo_access.database.schema``
and the reserved data values the authorization model relies on.
"""

from typing import Final


class DatabaseSchemas:
    """Database schema names."""

    AUTH: Final[str] = "auth"


class Tables:
    """Unqualified table names inside the auth schema."""

    USERS: Final[str] = "users"
    GROUPS: Final[str] = "groups"
    GROUP_MEMBERSHIPS: Final[str] = "group_memberships"
    ROLE_GRANTS: Final[str] = "role_grants"
    AUDIT_LOG: Final[str] = "log"


class GlobalScope:
    """Reserved scope pair that stands for "no particular resource".

    Global authorization is ordinary grant data carrying this pair, not a
    separate table or code path.
    """

    KIND: Final[str] = "global"
    ID: Final[str] = "global"


class AuditActions:
    """Action names written by the self-service boundary."""

    SELF_DEACTIVATED: Final[str] = "user.self_deactivated"
    GROUP_LEFT: Final[str] = "group.left"


# Advisory lock key taken while the schema is initialized
SCHEMA_INIT_LOCK_KEY: Final[int] = 0x6E656F5F616363  # "neo_acc"
