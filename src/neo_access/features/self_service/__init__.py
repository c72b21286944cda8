"""Self-service feature: endpoints a caller uses on their own account."""

from .dependencies import (
    IdentityResolver,
    HeaderIdentityResolver,
    get_services,
    get_settings_dependency,
    get_current_user_id,
)
from .routers.me import router

__all__ = [
    "IdentityResolver",
    "HeaderIdentityResolver",
    "get_services",
    "get_settings_dependency",
    "get_current_user_id",
    "router",
]
