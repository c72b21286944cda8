"""Users feature module."""

from .entities import User
from .repositories import UserRepository
from .services import UserService

__all__ = ["User", "UserRepository", "UserService"]
