"""Scope value object.

A scope narrows where a role applies: ``("project", "P7")`` is one project,
``GLOBAL_SCOPE`` is everywhere. The global scope is an ordinary value that
happens to be reserved, so global grants live in the same table and go
through the same queries as every other grant.
"""

from dataclasses import dataclass

from ....config.constants import GlobalScope
from ....core.exceptions import ValidationError


def require_name(value: object, what: str) -> str:
    """Scope parts and role names are non-empty strings."""
    if not isinstance(value, str) or not value:
        raise ValidationError(f"{what} must be a non-empty string, got: {value!r}")
    return value


@dataclass(frozen=True)
class Scope:
    """A (kind, id) pair such as ``("project", "P7")``."""

    kind: str
    id: str

    def __post_init__(self):
        require_name(self.kind, "Scope kind")
        require_name(self.id, "Scope id")

    @property
    def is_global(self) -> bool:
        return self == GLOBAL_SCOPE

    def __str__(self) -> str:
        return f"{self.kind}:{self.id}"


GLOBAL_SCOPE = Scope(GlobalScope.KIND, GlobalScope.ID)
