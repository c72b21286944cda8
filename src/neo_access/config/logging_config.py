"""Centralized logging configuration for neo-access.

Library modules log through ``logging.getLogger(__name__)``; this module
decides levels, format and which noisy modules are quieted. Nothing here runs
on import, callers invoke ``setup_logging`` once at startup.
"""

import logging
import logging.config
import os
from typing import Any, Dict, Optional
from enum import Enum


class LogLevel(str, Enum):
    """Supported log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogVerbosity(str, Enum):
    """Log verbosity modes."""
    QUIET = "QUIET"      # Only errors and critical
    NORMAL = "NORMAL"    # Standard logging (info and above)
    VERBOSE = "VERBOSE"  # Info level everywhere, including quiet modules
    DEBUG = "DEBUG"      # Full debug logging


class LogFormat(str, Enum):
    """Log format options."""
    SIMPLE = "simple"
    DETAILED = "detailed"
    JSON = "json"


_FORMATS = {
    LogFormat.SIMPLE: "%(asctime)s - %(levelname)s - %(message)s",
    LogFormat.DETAILED: "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s",
    LogFormat.JSON: '{"time":"%(asctime)s","level":"%(levelname)s","module":"%(name)s","message":"%(message)s"}',
}


def get_log_level_from_verbosity(verbosity: str, default: str = LogLevel.INFO.value) -> str:
    """Map verbosity mode to log level."""
    verbosity_map = {
        LogVerbosity.QUIET: LogLevel.ERROR.value,
        LogVerbosity.NORMAL: default,
        LogVerbosity.VERBOSE: LogLevel.INFO.value,
        LogVerbosity.DEBUG: LogLevel.DEBUG.value,
    }
    try:
        return verbosity_map[LogVerbosity(verbosity.upper())]
    except ValueError:
        return default


class LoggingConfig:
    """Centralized logging configuration manager."""

    # Repositories log every statement at DEBUG; keep them at WARNING unless debugging
    DEFAULT_QUIET_MODULES = [
        "neo_access.features.users.repositories",
        "neo_access.features.groups.repositories",
        "neo_access.features.memberships.repositories",
        "neo_access.features.grants.repositories",
        "neo_access.features.audit.repositories",
    ]

    # Modules that should only log errors
    ERROR_ONLY_MODULES = [
        "asyncpg",
        "asyncio",
        "httpx",
        "httpcore",
    ]

    @classmethod
    def build_config(
        cls,
        log_level: str = "INFO",
        verbosity: str = "NORMAL",
        log_format: str = "simple",
    ) -> Dict[str, Any]:
        """Build a ``dictConfig`` mapping."""
        effective_log_level = get_log_level_from_verbosity(verbosity, log_level.upper())
        try:
            format_string = _FORMATS[LogFormat(log_format.lower())]
        except ValueError:
            format_string = _FORMATS[LogFormat.SIMPLE]

        logging_config: Dict[str, Any] = {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": format_string,
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "level": effective_log_level,
                    "formatter": "default",
                    "stream": "ext://sys.stdout",
                },
            },
            "root": {
                "level": effective_log_level,
                "handlers": ["console"],
            },
            "loggers": {},
        }

        quiet_level = "DEBUG" if effective_log_level == "DEBUG" else "WARNING"
        if verbosity.upper() == LogVerbosity.VERBOSE.value:
            quiet_level = "INFO"
        for module in cls.DEFAULT_QUIET_MODULES:
            logging_config["loggers"][module] = {
                "level": quiet_level,
                "handlers": ["console"],
                "propagate": False,
            }

        for module in cls.ERROR_ONLY_MODULES:
            logging_config["loggers"][module] = {
                "level": "ERROR",
                "handlers": ["console"],
                "propagate": False,
            }

        return logging_config

    @classmethod
    def configure(
        cls,
        log_level: Optional[str] = None,
        verbosity: Optional[str] = None,
        log_format: Optional[str] = None,
    ) -> None:
        """Configure logging, falling back to environment variables."""
        log_level = log_level or os.getenv("LOG_LEVEL", "INFO")
        verbosity = verbosity or os.getenv("LOG_VERBOSITY", "NORMAL")
        log_format = log_format or os.getenv("LOG_FORMAT", "simple")

        logging.config.dictConfig(cls.build_config(log_level, verbosity, log_format))

        logger = logging.getLogger(__name__)
        logger.debug(f"Logging configured: level={log_level}, verbosity={verbosity}, format={log_format}")


def setup_logging(settings=None) -> None:
    """Configure logging from an ``AccessSettings`` instance or the environment.

    Called once at application startup.
    """
    if settings is None:
        LoggingConfig.configure()
        return
    LoggingConfig.configure(
        log_level=settings.log_level,
        verbosity=settings.log_verbosity,
        log_format=settings.log_format,
    )
