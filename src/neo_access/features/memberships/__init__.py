"""Memberships feature module."""

from .entities import Membership
from .repositories import MembershipRepository
from .services import MembershipService

__all__ = ["Membership", "MembershipRepository", "MembershipService"]
