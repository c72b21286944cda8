"""HTTP status code mapping for exceptions."""

from typing import Dict, Type

from .domain import (
    ValidationError,
    BadRequestError,
    MalformedIdentifierError,
    ConflictError,
    UnknownPrincipalError,
    NotFoundError,
    AuthenticationError,
)
from .database import DatabaseError, StorageUnavailableError, SchemaInitializationError


HTTP_STATUS_MAP: Dict[Type[Exception], int] = {
    # 400 Bad Request
    ValidationError: 400,
    BadRequestError: 400,
    MalformedIdentifierError: 400,

    # 401 Unauthorized
    AuthenticationError: 401,

    # 404 Not Found
    NotFoundError: 404,
    UnknownPrincipalError: 404,

    # 409 Conflict
    ConflictError: 409,

    # 500 Internal Server Error
    DatabaseError: 500,
    SchemaInitializationError: 500,

    # 503 Service Unavailable
    StorageUnavailableError: 503,
}


def get_http_status_code(exception: Exception) -> int:
    """Resolve a status code by walking the exception's MRO."""
    for klass in type(exception).__mro__:
        if klass in HTTP_STATUS_MAP:
            return HTTP_STATUS_MAP[klass]
    return 500
