"""neo-access: users, groups, memberships and scoped role grants on PostgreSQL."""

from .__version__ import __version__
from .core.value_objects import UserId, GroupId, Principal, PageWindow
from .database.connection import DatabaseManager
from .database.schema import init_schema
from .features.grants import Scope, GLOBAL_SCOPE
from .services import AccessServices

__all__ = [
    "__version__",
    "UserId",
    "GroupId",
    "Principal",
    "PageWindow",
    "DatabaseManager",
    "init_schema",
    "Scope",
    "GLOBAL_SCOPE",
    "AccessServices",
]
