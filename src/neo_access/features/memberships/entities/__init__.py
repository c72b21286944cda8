"""Membership entities."""

from .membership import Membership

__all__ = ["Membership"]
