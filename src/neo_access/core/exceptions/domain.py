"""Domain exceptions for neo-access.

Absence on lookup is never raised from the stores: lookups return ``None``.
``NotFoundError`` exists for the boundary layer, which turns an absent
principal record into a 404.
"""

from typing import Optional

from .base import NeoAccessError


class ValidationError(NeoAccessError):
    """Raised when caller input is invalid."""
    pass


class BadRequestError(ValidationError):
    """Raised when a request is malformed."""
    pass


class MalformedIdentifierError(BadRequestError):
    """Raised when text cannot be parsed as an identifier."""

    def __init__(self, kind: str, raw: object):
        self.kind = kind
        self.raw = raw
        super().__init__(
            f"Malformed {kind} identifier: {raw!r}",
            details={"kind": kind},
        )


class ConflictError(NeoAccessError):
    """Raised when a create or add would violate a uniqueness constraint."""

    def __init__(self, entity_type: str, field: Optional[str] = None, value: Optional[str] = None):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        if field:
            message = f"{entity_type} with {field} '{value}' already exists"
        else:
            message = f"{entity_type} already exists"
        super().__init__(message, details={"entity": entity_type, "field": field})


class UnknownPrincipalError(NeoAccessError):
    """Raised when a write references a user or group that does not exist."""

    def __init__(self, entity_type: str, identifier: str):
        self.entity_type = entity_type
        self.identifier = identifier
        super().__init__(
            f"Referenced {entity_type} '{identifier}' does not exist",
            details={"entity": entity_type, "id": identifier},
        )


class NotFoundError(NeoAccessError):
    """Raised by the boundary layer when a requested record is absent."""

    def __init__(self, entity_type: str):
        self.entity_type = entity_type
        super().__init__(f"{entity_type} not found", details={"entity": entity_type})


class AuthenticationError(NeoAccessError):
    """Raised when the caller could not be resolved to a principal."""
    pass
