"""Authenticator — checks username/password pairs against the IdentityStore."""

from __future__ import annotations

import asyncio
import hmac
import logging
from typing import TYPE_CHECKING

from vroot.fs.exceptions import AuthenticationError, BadPasswordError, BadUserError
from vroot.passwords import ALGORITHM, DEFAULT_ITERATIONS, is_password_hash, verify_password

if TYPE_CHECKING:
    from vroot.users import IdentityStore, User

logger = logging.getLogger(__name__)

FAILURE_DELAY = 1.5
"""Seconds every failed attempt waits before it is reported."""

# Never matches; verified against so that every attempt derives one digest.
_DUMMY_DIGEST = f"{ALGORITHM}${DEFAULT_ITERATIONS}${'0' * 32}${'0' * 64}"


def password_ok(user: User, password: str) -> bool:
    """Check *password* against the stored credential of *user*.

    Surrounding whitespace is ignored on both sides.
    """
    stored = user.password.strip()
    given = password.strip()
    if is_password_hash(stored):
        return verify_password(given, stored)
    return hmac.compare_digest(stored.encode("utf-8"), given.encode("utf-8"))


class Authenticator:
    """Verifies credentials with a fixed delay on every failure.

    Unknown users and wrong passwords fail after the same delay and with the
    same message. Every attempt also derives exactly one password digest, so
    response timing does not reveal which user names exist. The digest work
    runs in a worker thread.
    """

    def __init__(self, users: IdentityStore, failure_delay: float = FAILURE_DELAY) -> None:
        self.users = users
        self.failure_delay = failure_delay

    @property
    def name(self) -> str:
        return type(self).__qualname__

    async def authenticate(self, username: str, password: str | None) -> User:
        """Return the matching user or raise ``AuthenticationError``."""
        try:
            user = await asyncio.to_thread(self._check, username, password)
        except AuthenticationError as e:
            logger.info("Authentication failed for %r: %s", username, type(e).__name__)
            await asyncio.sleep(self.failure_delay)
            raise
        logger.debug("Authenticated %s", user)
        return user

    def _check(self, username: str, password: str | None) -> User:
        user = self.users.get(username)
        hashed = user is not None and is_password_hash(user.password.strip())
        if not (hashed and password is not None):
            verify_password((password or "").strip(), _DUMMY_DIGEST)

        if user is None:
            raise BadUserError(username)
        if password is None or not password_ok(user, password):
            raise BadPasswordError(username)
        return user
