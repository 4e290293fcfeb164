"""Resolution outcomes: ReadableAt, WritableAt, VirtualRoot, Rejected."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, TypeAlias

from .exceptions import (
    CanonicalizationError,
    EscapeDetectedError,
    MalformedPathError,
    PermissionDeniedError,
    RejectionError,
    UnknownMountError,
)
from .permissions import Permission

if TYPE_CHECKING:
    from pathlib import Path


class RejectReason(str, Enum):
    """Why a client path could not be resolved."""

    MALFORMED_PATH = "malformed_path"
    UNKNOWN_MOUNT = "unknown_mount"
    CANONICALIZATION_FAILED = "canonicalization_failed"
    ESCAPE_DETECTED = "escape_detected"


_REJECTION_ERRORS: dict[RejectReason, type[RejectionError]] = {
    RejectReason.MALFORMED_PATH: MalformedPathError,
    RejectReason.UNKNOWN_MOUNT: UnknownMountError,
    RejectReason.CANONICALIZATION_FAILED: CanonicalizationError,
    RejectReason.ESCAPE_DETECTED: EscapeDetectedError,
}


@dataclass(frozen=True, slots=True)
class ReadableAt:
    """Path inside a mount that may be read but not written."""

    real_path: Path
    mount_root: Path

    @property
    def permission(self) -> Permission:
        return Permission.READ_ONLY


@dataclass(frozen=True, slots=True)
class WritableAt:
    """Path inside a writable mount, strictly below the mount root."""

    real_path: Path
    mount_root: Path

    @property
    def permission(self) -> Permission:
        return Permission.READ_WRITE


@dataclass(frozen=True, slots=True)
class VirtualRoot:
    """The namespace level above all mounts; only listing is meaningful."""

    mounts: tuple[tuple[str, Path], ...]


@dataclass(frozen=True, slots=True)
class Rejected:
    """A path that resolves to nothing the user may touch."""

    reason: RejectReason
    detail: str = ""

    def to_error(self) -> RejectionError:
        """Build the exception matching this rejection."""
        return _REJECTION_ERRORS[self.reason](self.detail or self.reason.value)


ResolutionOutcome: TypeAlias = ReadableAt | WritableAt | VirtualRoot | Rejected


def require_readable(outcome: ResolutionOutcome) -> Path:
    """Return the real path of *outcome* if reads are allowed there.

    Raises the rejection's error, or ``PermissionDeniedError`` for the
    virtual root, which holds no file content.
    """
    match outcome:
        case ReadableAt(real_path=path) | WritableAt(real_path=path):
            return path
        case VirtualRoot():
            raise PermissionDeniedError("The virtual root holds no files")
        case Rejected():
            raise outcome.to_error()
    raise TypeError(f"Unexpected resolution outcome: {outcome!r}")


def require_writable(outcome: ResolutionOutcome) -> Path:
    """Return the real path of *outcome* if writes are allowed there."""
    match outcome:
        case WritableAt(real_path=path):
            return path
        case ReadableAt():
            raise PermissionDeniedError("Permission denied")
        case VirtualRoot():
            raise PermissionDeniedError("The virtual root holds no files")
        case Rejected():
            raise outcome.to_error()
    raise TypeError(f"Unexpected resolution outcome: {outcome!r}")
