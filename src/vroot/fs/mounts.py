"""BoundDirectory and MountTable."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path

from .exceptions import ConfigError
from .permissions import Permission
from .resolution import Rejected, RejectReason, VirtualRoot


@dataclass(frozen=True, slots=True)
class BoundDirectory:
    """A named mount point bound to a real directory subtree."""

    name: str
    """Mount name as it appears in the user's virtual root, e.g. "photos"."""

    real_path: Path
    """Absolute real directory the mount exposes."""

    read_only: bool = False
    """If True, nothing below the mount may be written."""

    def __post_init__(self) -> None:
        if not self.name or "/" in self.name or self.name in (".", ".."):
            raise ConfigError(f"Invalid mount name: {self.name!r}")
        real_path = Path(self.real_path)
        if not real_path.is_absolute():
            raise ConfigError(
                f"Mount {self.name!r} must be bound to an absolute path, got {str(real_path)!r}"
            )
        object.__setattr__(self, "real_path", real_path)

    @property
    def permission(self) -> Permission:
        return Permission.from_flag(self.read_only)


class MountTable(Mapping[str, BoundDirectory]):
    """Immutable, insertion-ordered mapping of mount name to BoundDirectory.

    Resolves the first segment of a normalized client path to a mount.
    """

    __slots__ = ("_mounts",)

    def __init__(self, mounts: Mapping[str, BoundDirectory] | None = None) -> None:
        self._mounts: dict[str, BoundDirectory] = dict(mounts or {})

    @classmethod
    def of(cls, mounts: Iterable[BoundDirectory]) -> MountTable:
        """Build a table from *mounts*, rejecting duplicate names."""
        table: dict[str, BoundDirectory] = {}
        for mount in mounts:
            if mount.name in table:
                raise ConfigError(f"Duplicate mount name: {mount.name!r}")
            table[mount.name] = mount
        return cls(table)

    def __getitem__(self, name: str) -> BoundDirectory:
        return self._mounts[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._mounts)

    def __len__(self) -> int:
        return len(self._mounts)

    def __repr__(self) -> str:
        return f"MountTable({list(self._mounts)!r})"

    def accesses(self) -> list[tuple[str, Path]]:
        """List ``(mount name, real path)`` pairs in table order."""
        return [(name, mount.real_path) for name, mount in self._mounts.items()]

    def lookup(
        self, segments: list[str]
    ) -> VirtualRoot | Rejected | tuple[BoundDirectory, list[str]]:
        """Resolve path *segments* against this table.

        Returns the virtual root for an empty path, a rejection for an
        unknown mount, or the mount together with the segments below it.
        """
        if not segments or segments[0] == "":
            return VirtualRoot(tuple(self.accesses()))

        first, rest = segments[0], segments[1:]
        mount = self._mounts.get(first)
        if mount is None:
            return Rejected(RejectReason.UNKNOWN_MOUNT, f"No mount named {first!r}")
        return mount, rest
