"""Result types: Metadata and FileEntry."""

from __future__ import annotations

import stat
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import os
    from pathlib import Path


@dataclass(frozen=True, slots=True)
class Metadata:
    """File/directory metadata taken from ``lstat``."""

    size: int
    mode: int
    modified: datetime
    uid: int = 0
    gid: int = 0
    links: int = 1

    @classmethod
    def from_stat(cls, st: os.stat_result) -> Metadata:
        return cls(
            size=st.st_size,
            mode=st.st_mode,
            modified=datetime.fromtimestamp(st.st_mtime, tz=UTC),
            uid=getattr(st, "st_uid", 0),
            gid=getattr(st, "st_gid", 0),
            links=getattr(st, "st_nlink", 1),
        )

    @property
    def is_dir(self) -> bool:
        return stat.S_ISDIR(self.mode)

    @property
    def is_file(self) -> bool:
        return stat.S_ISREG(self.mode)

    @property
    def is_symlink(self) -> bool:
        return stat.S_ISLNK(self.mode)


@dataclass(frozen=True, slots=True)
class FileEntry:
    """One entry of a directory listing.

    ``path`` is relative to the mount root, or the mount name at the
    virtual root.
    """

    path: Path
    metadata: Metadata
