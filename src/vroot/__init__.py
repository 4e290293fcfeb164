"""vroot: per-user virtual mount namespaces over the local filesystem.

Each user sees a private set of named mounts bound to real directories;
every client path is confined to its mount's subtree.
"""

__version__ = "0.1.0"

from vroot._namespace import Namespace
from vroot.auth import FAILURE_DELAY, Authenticator
from vroot.fs.exceptions import (
    AuthenticationError,
    BadPasswordError,
    BadUserError,
    ConfigError,
    ErrorKind,
    NotAvailableError,
    PermissionDeniedError,
    VRootError,
)
from vroot.fs.local_disk import LocalStorage
from vroot.fs.mounts import BoundDirectory, MountTable
from vroot.fs.resolution import (
    ReadableAt,
    Rejected,
    RejectReason,
    ResolutionOutcome,
    VirtualRoot,
    WritableAt,
)
from vroot.fs.resolver import Resolver
from vroot.users import IdentityStore, User

__all__ = [
    "FAILURE_DELAY",
    "AuthenticationError",
    "Authenticator",
    "BadPasswordError",
    "BadUserError",
    "BoundDirectory",
    "ConfigError",
    "ErrorKind",
    "IdentityStore",
    "LocalStorage",
    "MountTable",
    "Namespace",
    "NotAvailableError",
    "PermissionDeniedError",
    "ReadableAt",
    "RejectReason",
    "Rejected",
    "ResolutionOutcome",
    "Resolver",
    "User",
    "VRootError",
    "VirtualRoot",
    "WritableAt",
    "__version__",
]
