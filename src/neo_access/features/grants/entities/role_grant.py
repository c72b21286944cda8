"""Role grant domain entity."""

from dataclasses import dataclass

from ....core.value_objects import Principal
from .scope import Scope


@dataclass(frozen=True)
class RoleGrant:
    """The fact that ``principal`` holds ``role`` within ``scope``."""

    principal: Principal
    scope: Scope
    role: str
