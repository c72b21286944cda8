"""Offset pagination window."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PageWindow:
    """A (limit, offset) window over an ordered listing."""

    limit: int
    offset: int = 0

    def __post_init__(self):
        if isinstance(self.limit, bool) or not isinstance(self.limit, int) or self.limit < 1:
            raise ValueError(f"Page limit must be a positive integer, got: {self.limit!r}")
        if isinstance(self.offset, bool) or not isinstance(self.offset, int) or self.offset < 0:
            raise ValueError(f"Page offset must be a non-negative integer, got: {self.offset!r}")
