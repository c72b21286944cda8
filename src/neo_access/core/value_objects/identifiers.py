"""Value objects for identifiers in neo-access.

``UserId`` and ``GroupId`` wrap the same kind of value (a UUID) but are
distinct types: dataclass equality compares the class, so a ``UserId`` never
equals a ``GroupId`` and type checkers reject passing one for the other.
"""

import re
from dataclasses import dataclass
from typing import ClassVar, Type, TypeVar, Union
from uuid import UUID

from ..exceptions import MalformedIdentifierError
from ...utils.uuid import generate_uuid_v7


_CANONICAL_UUID = re.compile(
    r'[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}', re.I
)

_IdT = TypeVar("_IdT", bound="_UuidIdentifier")


@dataclass(frozen=True)
class _UuidIdentifier:
    """Immutable wrapper around a UUID, rendered in canonical form."""

    value: UUID

    kind: ClassVar[str] = "entity"

    def __post_init__(self):
        if not isinstance(self.value, UUID):
            raise TypeError(
                f"{type(self).__name__} wraps a UUID, got {type(self.value).__name__}; "
                f"use {type(self).__name__}.parse() for text"
            )

    @classmethod
    def parse(cls: Type[_IdT], raw: str) -> _IdT:
        """Parse the canonical hyphenated text form (any case)."""
        if not isinstance(raw, str) or not _CANONICAL_UUID.fullmatch(raw):
            raise MalformedIdentifierError(cls.kind, raw)
        try:
            value = UUID(raw)
        except ValueError as e:
            raise MalformedIdentifierError(cls.kind, raw) from e
        return cls(value)

    @classmethod
    def generate(cls: Type[_IdT]) -> _IdT:
        """Create a new time-ordered identifier."""
        return cls(generate_uuid_v7())

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class UserId(_UuidIdentifier):
    """Identifier of a user."""

    kind: ClassVar[str] = "user"


@dataclass(frozen=True)
class GroupId(_UuidIdentifier):
    """Identifier of a group."""

    kind: ClassVar[str] = "group"


# Anything that can hold a role grant
Principal = Union[UserId, GroupId]


def require_identifier(value: object, expected: Type[_IdT], argument: str) -> _IdT:
    """Reject a value of the wrong identifier type at runtime."""
    if not isinstance(value, expected):
        raise TypeError(
            f"{argument} must be a {expected.__name__}, got {type(value).__name__}"
        )
    return value
