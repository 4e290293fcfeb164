"""Access levels of mounts and of resolved paths."""

from __future__ import annotations

from enum import Enum


class Permission(str, Enum):
    """Whether a mount, or a path resolved inside one, accepts writes.

    A read-write mount still yields ``READ_ONLY`` paths at its root.
    """

    READ_WRITE = "read_write"
    READ_ONLY = "read_only"

    @classmethod
    def from_flag(cls, read_only: bool) -> Permission:
        """Map a configured ``read_only`` flag to a permission."""
        return cls.READ_ONLY if read_only else cls.READ_WRITE

    @property
    def can_write(self) -> bool:
        return self is Permission.READ_WRITE
