"""Utilities module for neo-access."""

from .uuid import generate_uuid_v7
from .datetime import utc_now

__all__ = [
    "generate_uuid_v7",
    "utc_now",
]
