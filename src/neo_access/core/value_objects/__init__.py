"""Value objects module for neo-access."""

from .identifiers import (
    UserId,
    GroupId,
    Principal,
    require_identifier,
)
from .pagination import PageWindow

__all__ = [
    "UserId",
    "GroupId",
    "Principal",
    "require_identifier",
    "PageWindow",
]
