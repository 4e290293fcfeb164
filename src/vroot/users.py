"""User records and the IdentityStore."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path

from vroot.fs.exceptions import ConfigError
from vroot.fs.mounts import BoundDirectory, MountTable


@dataclass(frozen=True)
class User:
    """An account and the mounts it may see.

    Built once at startup and shared read-only by every session.
    """

    name: str
    password: str = field(repr=False)
    mounts: MountTable = field(default_factory=MountTable)

    def __post_init__(self) -> None:
        if not self.name:
            raise ConfigError("User name must not be empty")
        if not isinstance(self.mounts, MountTable):
            object.__setattr__(self, "mounts", MountTable.of(self.mounts))

    def __str__(self) -> str:
        return f"Account of {self.name}"

    def get_access(self, name: str) -> BoundDirectory | None:
        """Return the mount called *name*, or None."""
        return self.mounts.get(name)

    def accesses(self) -> list[tuple[str, Path]]:
        """List ``(mount name, real path)`` pairs in mount table order."""
        return self.mounts.accesses()


class IdentityStore(Mapping[str, User]):
    """Immutable mapping of user name to User."""

    __slots__ = ("_users",)

    def __init__(self, users: Iterable[User] = ()) -> None:
        table: dict[str, User] = {}
        for user in users:
            if user.name in table:
                raise ConfigError(f"Duplicate user name: {user.name!r}")
            table[user.name] = user
        self._users = table

    def __getitem__(self, name: str) -> User:
        return self._users[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._users)

    def __len__(self) -> int:
        return len(self._users)

    def __repr__(self) -> str:
        return f"IdentityStore({list(self._users)!r})"
