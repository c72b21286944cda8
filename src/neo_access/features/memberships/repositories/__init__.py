"""Membership repositories."""

from .membership_repository import MembershipRepository

__all__ = ["MembershipRepository"]
