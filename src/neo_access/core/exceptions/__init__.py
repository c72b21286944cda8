"""Exceptions module for neo-access."""

from .base import (
    NeoAccessError,
    get_http_status_code,
    create_error_response,
)

from .domain import (
    ValidationError,
    BadRequestError,
    MalformedIdentifierError,
    ConflictError,
    UnknownPrincipalError,
    NotFoundError,
    AuthenticationError,
)

from .database import (
    DatabaseError,
    StorageUnavailableError,
    SchemaInitializationError,
    InvalidIdentifierNameError,
)

from .http_mapping import HTTP_STATUS_MAP

__all__ = [
    # Base
    "NeoAccessError",
    "get_http_status_code",
    "create_error_response",
    "HTTP_STATUS_MAP",

    # Domain
    "ValidationError",
    "BadRequestError",
    "MalformedIdentifierError",
    "ConflictError",
    "UnknownPrincipalError",
    "NotFoundError",
    "AuthenticationError",

    # Database
    "DatabaseError",
    "StorageUnavailableError",
    "SchemaInitializationError",
    "InvalidIdentifierNameError",
]
