"""Filesystem layer — path normalization, mounts, confinement, storage."""

from vroot.fs.confinement import canonicalize, confine
from vroot.fs.exceptions import (
    CanonicalizationError,
    ErrorKind,
    EscapeDetectedError,
    MalformedPathError,
    NotAvailableError,
    PermissionDeniedError,
    RejectionError,
    StorageError,
    UnknownMountError,
    VRootError,
)
from vroot.fs.local_disk import LocalStorage
from vroot.fs.mounts import BoundDirectory, MountTable
from vroot.fs.permissions import Permission
from vroot.fs.resolution import (
    ReadableAt,
    Rejected,
    RejectReason,
    ResolutionOutcome,
    VirtualRoot,
    WritableAt,
    require_readable,
    require_writable,
)
from vroot.fs.resolver import Resolver
from vroot.fs.types import FileEntry, Metadata
from vroot.fs.utils import normalize_path, split_segments, validate_path

__all__ = [
    "BoundDirectory",
    "CanonicalizationError",
    "ErrorKind",
    "EscapeDetectedError",
    "FileEntry",
    "LocalStorage",
    "MalformedPathError",
    "Metadata",
    "MountTable",
    "NotAvailableError",
    "Permission",
    "ReadableAt",
    "RejectReason",
    "Rejected",
    "RejectionError",
    "ResolutionOutcome",
    "Resolver",
    "StorageError",
    "UnknownMountError",
    "VRootError",
    "VirtualRoot",
    "WritableAt",
    "canonicalize",
    "confine",
    "normalize_path",
    "require_readable",
    "require_writable",
    "split_segments",
    "validate_path",
]
