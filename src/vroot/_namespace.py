"""Namespace — wires the identity store, authenticator, and storage together."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from vroot import config
from vroot.auth import FAILURE_DELAY, Authenticator
from vroot.fs.local_disk import LocalStorage
from vroot.fs.resolver import Resolver

if TYPE_CHECKING:
    from pathlib import Path

    from vroot.fs.resolution import ResolutionOutcome
    from vroot.users import IdentityStore, User

logger = logging.getLogger(__name__)


class Namespace:
    """Per-user virtual mount namespace over the local filesystem.

    Holds one immutable IdentityStore shared by every session. A protocol
    engine authenticates with :meth:`authenticate` and then calls the
    operations on :attr:`storage` with the returned user.
    """

    def __init__(self, users: IdentityStore, *, failure_delay: float = FAILURE_DELAY) -> None:
        self.users = users
        self.resolver = Resolver()
        self.authenticator = Authenticator(users, failure_delay=failure_delay)
        self.storage = LocalStorage(self.resolver)

    @classmethod
    def from_config(cls, path: Path | str, **kwargs: float) -> Namespace:
        """Load the identity store from *path*. Raises ``ConfigError``."""
        return cls(config.load(path), **kwargs)

    async def authenticate(self, username: str, password: str | None) -> User:
        return await self.authenticator.authenticate(username, password)

    async def resolve(self, user: User, path: str) -> ResolutionOutcome:
        """Resolve *path* for *user* without performing any I/O on it."""
        return await self.resolver.resolve(user, path)
