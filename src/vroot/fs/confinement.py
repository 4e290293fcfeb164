"""Confinement check: canonicalize against the live filesystem and classify."""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

from .resolution import ReadableAt, Rejected, RejectReason, WritableAt

if TYPE_CHECKING:
    from .mounts import BoundDirectory

logger = logging.getLogger(__name__)


def canonicalize(path: Path | str) -> Path:
    """Resolve *path* to its canonical absolute form using real directory entries.

    Symlinks and ``..`` are resolved against the filesystem. The parent
    directory must exist; the final component may be missing so new files can
    be addressed. An existing final component (a symlink included) is
    resolved strictly.

    Raises:
        OSError: a parent component is missing or cannot be stat'ed, or an
            existing final component cannot be resolved.
    """
    path = Path(path)
    if os.path.lexists(path):
        return Path(os.path.realpath(path, strict=True))

    parent = Path(os.path.realpath(path.parent, strict=True))
    if not parent.is_dir():
        raise NotADirectoryError(f"Not a directory: {path.parent}")
    return parent / path.name


async def confine(candidate: Path, bound: BoundDirectory) -> ReadableAt | WritableAt | Rejected:
    """Canonicalize *candidate* and verify it stays inside *bound*.

    Never cached: the filesystem may change between requests.
    """
    try:
        canonical = await asyncio.to_thread(canonicalize, candidate)
        root = await asyncio.to_thread(canonicalize, bound.real_path)
    except (OSError, RuntimeError) as e:
        logger.debug("Cannot canonicalize %s: %s", candidate, e)
        return Rejected(RejectReason.CANONICALIZATION_FAILED, f"Cannot resolve path: {e}")

    if not canonical.is_relative_to(root):
        logger.warning(
            "Escape from mount %r detected: %s resolves to %s outside %s",
            bound.name,
            candidate,
            canonical,
            root,
        )
        return Rejected(
            RejectReason.ESCAPE_DETECTED,
            f"{candidate} resolves outside mount {bound.name!r}",
        )

    if canonical.name == bound.name or canonical == root or bound.read_only:
        return ReadableAt(canonical, bound.real_path)
    return WritableAt(canonical, bound.real_path)
