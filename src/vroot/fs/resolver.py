"""Resolver — client path to ResolutionOutcome for one user."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .confinement import confine
from .resolution import Rejected, RejectReason, VirtualRoot
from .utils import normalize_path, split_segments, validate_path

if TYPE_CHECKING:
    from vroot.users import User

    from .resolution import ResolutionOutcome

logger = logging.getLogger(__name__)


class Resolver:
    """Maps client-supplied paths onto a user's mounts.

    Two phases: a lexical normalization that rejects ``..`` escapes before
    any disk access, then a live canonicalization re-checked against the
    bound subtree. Stateless; safe to share across sessions.
    """

    async def resolve(self, user: User, path: str) -> ResolutionOutcome:
        outcome = await self._resolve(user, path)
        logger.debug("Resolved %r for %s: %r", path, user.name, outcome)
        return outcome

    async def _resolve(self, user: User, path: str) -> ResolutionOutcome:
        valid, error = validate_path(path)
        if not valid:
            return Rejected(RejectReason.MALFORMED_PATH, error)

        normalized = normalize_path(path)
        if normalized is None:
            return Rejected(
                RejectReason.MALFORMED_PATH, f"Path climbs above the virtual root: {path}"
            )

        found = user.mounts.lookup(split_segments(normalized))
        if isinstance(found, (VirtualRoot, Rejected)):
            return found

        mount, rest = found
        candidate = mount.real_path.joinpath(*rest)
        return await confine(candidate, mount)
