"""
Auth schema definition and explicit initialization.

``init_schema`` is called once at process startup with the application's
``DatabaseManager``. The DDL is idempotent, so concurrent or repeated
startups converge on the same layout; an advisory lock serializes them.

Cascades are enforced by foreign-key referential actions, so deleting a user
or group can never race with a concurrent membership or grant insert.
"""

import logging
from typing import List

import asyncpg

from ..config.constants import DatabaseSchemas, Tables, SCHEMA_INIT_LOCK_KEY
from ..core.exceptions import SchemaInitializationError
from .statements import TableSpec

logger = logging.getLogger(__name__)


SCHEMA = DatabaseSchemas.AUTH

USERS_TABLE = TableSpec(
    SCHEMA, Tables.USERS,
    ("id", "username", "email", "details", "active", "created_at", "updated_at"),
)

GROUPS_TABLE = TableSpec(
    SCHEMA, Tables.GROUPS,
    ("id", "display_name", "details", "active", "created_at", "updated_at"),
)

MEMBERSHIPS_TABLE = TableSpec(
    SCHEMA, Tables.GROUP_MEMBERSHIPS,
    ("group_id", "user_id", "role_name", "added_at", "seq"),
)

ROLE_GRANTS_TABLE = TableSpec(
    SCHEMA, Tables.ROLE_GRANTS,
    ("id", "user_id", "group_id", "scope_kind", "scope_id", "role_name", "granted_at"),
)

AUDIT_LOG_TABLE = TableSpec(
    SCHEMA, Tables.AUDIT_LOG,
    ("id", "user_id", "action", "occurred_at"),
)


# Unique constraints, used to report which field caused a conflict
USERS_USERNAME_KEY = "users_username_key"
USERS_EMAIL_KEY = "users_email_key"
GROUPS_DISPLAY_NAME_KEY = "groups_display_name_key"
MEMBERSHIPS_PKEY = "group_memberships_pkey"

# Foreign keys, used to report which principal a write referenced
MEMBERSHIPS_GROUP_FKEY = "group_memberships_group_id_fkey"
MEMBERSHIPS_USER_FKEY = "group_memberships_user_id_fkey"
ROLE_GRANTS_USER_FKEY = "role_grants_user_id_fkey"
ROLE_GRANTS_GROUP_FKEY = "role_grants_group_id_fkey"

# Text columns use the "C" collation so ORDER BY is plain code-point order,
# independent of the server locale.
SCHEMA_STATEMENTS: List[str] = [
    f"CREATE SCHEMA IF NOT EXISTS {SCHEMA}",

    f"""
    CREATE TABLE IF NOT EXISTS {USERS_TABLE.qualified_name} (
        id UUID PRIMARY KEY,
        username TEXT COLLATE "C" NULL,
        email TEXT COLLATE "C" NOT NULL,
        details JSONB NULL,
        active BOOLEAN NOT NULL DEFAULT TRUE,
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        CONSTRAINT {USERS_USERNAME_KEY} UNIQUE (username),
        CONSTRAINT {USERS_EMAIL_KEY} UNIQUE (email)
    )
    """,

    f"""
    CREATE TABLE IF NOT EXISTS {GROUPS_TABLE.qualified_name} (
        id UUID PRIMARY KEY,
        display_name TEXT COLLATE "C" NOT NULL,
        details JSONB NULL,
        active BOOLEAN NOT NULL DEFAULT TRUE,
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        CONSTRAINT {GROUPS_DISPLAY_NAME_KEY} UNIQUE (display_name),
        CONSTRAINT groups_display_name_not_blank CHECK (length(btrim(display_name)) > 0)
    )
    """,

    f"""
    CREATE TABLE IF NOT EXISTS {MEMBERSHIPS_TABLE.qualified_name} (
        group_id UUID NOT NULL CONSTRAINT {MEMBERSHIPS_GROUP_FKEY}
            REFERENCES {GROUPS_TABLE.qualified_name} (id) ON DELETE CASCADE,
        user_id UUID NOT NULL CONSTRAINT {MEMBERSHIPS_USER_FKEY}
            REFERENCES {USERS_TABLE.qualified_name} (id) ON DELETE CASCADE,
        role_name TEXT COLLATE "C" NOT NULL,
        added_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        seq BIGINT GENERATED ALWAYS AS IDENTITY,
        CONSTRAINT {MEMBERSHIPS_PKEY} PRIMARY KEY (group_id, user_id)
    )
    """,

    f"""
    CREATE INDEX IF NOT EXISTS group_memberships_user_idx
        ON {MEMBERSHIPS_TABLE.qualified_name} (user_id)
    """,

    f"""
    CREATE TABLE IF NOT EXISTS {ROLE_GRANTS_TABLE.qualified_name} (
        id BIGINT GENERATED ALWAYS AS IDENTITY PRIMARY KEY,
        user_id UUID NULL CONSTRAINT {ROLE_GRANTS_USER_FKEY}
            REFERENCES {USERS_TABLE.qualified_name} (id) ON DELETE CASCADE,
        group_id UUID NULL CONSTRAINT {ROLE_GRANTS_GROUP_FKEY}
            REFERENCES {GROUPS_TABLE.qualified_name} (id) ON DELETE CASCADE,
        scope_kind TEXT COLLATE "C" NOT NULL,
        scope_id TEXT COLLATE "C" NOT NULL,
        role_name TEXT COLLATE "C" NOT NULL,
        granted_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        CONSTRAINT role_grants_single_holder CHECK (num_nonnulls(user_id, group_id) = 1)
    )
    """,

    f"""
    CREATE UNIQUE INDEX IF NOT EXISTS role_grants_user_key
        ON {ROLE_GRANTS_TABLE.qualified_name} (user_id, scope_kind, scope_id, role_name)
        WHERE user_id IS NOT NULL
    """,

    f"""
    CREATE UNIQUE INDEX IF NOT EXISTS role_grants_group_key
        ON {ROLE_GRANTS_TABLE.qualified_name} (group_id, scope_kind, scope_id, role_name)
        WHERE group_id IS NOT NULL
    """,

    f"""
    CREATE TABLE IF NOT EXISTS {AUDIT_LOG_TABLE.qualified_name} (
        id UUID PRIMARY KEY,
        user_id UUID NULL REFERENCES {USERS_TABLE.qualified_name} (id) ON DELETE SET NULL,
        action JSONB NOT NULL,
        occurred_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
    """,

    f"""
    CREATE INDEX IF NOT EXISTS log_user_occurred_idx
        ON {AUDIT_LOG_TABLE.qualified_name} (user_id, occurred_at DESC)
    """,
]


async def init_schema(db) -> None:
    """Create the auth schema and its tables if they are missing.

    Args:
        db: The application's ``DatabaseManager``
    """
    logger.info(f"Initializing schema '{SCHEMA}'")
    try:
        async with db.transaction() as conn:
            await conn.execute("SELECT pg_advisory_xact_lock($1)", SCHEMA_INIT_LOCK_KEY)
            for statement in SCHEMA_STATEMENTS:
                await conn.execute(statement)
    except asyncpg.PostgresError as e:
        logger.error(f"Schema initialization failed: {e}")
        raise SchemaInitializationError(f"Failed to initialize schema '{SCHEMA}': {e}") from e
    logger.info(f"Schema '{SCHEMA}' is ready")


async def drop_schema(db) -> None:
    """Drop the auth schema and everything in it. Irreversible."""
    logger.warning(f"Dropping schema '{SCHEMA}'")
    await db.execute(f"DROP SCHEMA IF EXISTS {SCHEMA} CASCADE")
