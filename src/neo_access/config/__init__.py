"""Configuration module for neo-access."""

from .constants import (
    DatabaseSchemas,
    Tables,
    GlobalScope,
    AuditActions,
    SCHEMA_INIT_LOCK_KEY,
)
from .settings import AccessSettings, get_settings
from .logging_config import (
    LoggingConfig,
    LogLevel,
    LogVerbosity,
    LogFormat,
    setup_logging,
)

__all__ = [
    # Constants
    "DatabaseSchemas",
    "Tables",
    "GlobalScope",
    "AuditActions",
    "SCHEMA_INIT_LOCK_KEY",
    # Settings
    "AccessSettings",
    "get_settings",
    # Logging
    "LoggingConfig",
    "LogLevel",
    "LogVerbosity",
    "LogFormat",
    "setup_logging",
]
