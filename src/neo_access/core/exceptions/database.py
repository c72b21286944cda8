"""Database-related exceptions for neo-access."""

from .base import NeoAccessError


class DatabaseError(NeoAccessError):
    """Base class for database-related errors."""
    pass


class StorageUnavailableError(DatabaseError):
    """Raised when the backing store cannot be reached.

    Never retried inside neo-access; retry policy belongs to the caller.
    """

    def __init__(self, reason: str = ""):
        self.reason = reason
        message = "Storage is unavailable"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class SchemaInitializationError(DatabaseError):
    """Raised when the auth schema could not be created."""
    pass


class InvalidIdentifierNameError(DatabaseError, ValueError):
    """Raised when table metadata carries an unsafe SQL identifier."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Invalid SQL identifier: {name!r}")
