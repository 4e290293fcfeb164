"""Custom exception hierarchy for the vroot namespace layer."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Protocol-facing error class; the protocol layer maps it to a reply code."""

    PERMISSION_DENIED = "permission_denied"
    PERMANENT_FILE_NOT_AVAILABLE = "permanent_file_not_available"
    FILE_NAME_NOT_ALLOWED = "file_name_not_allowed"
    LOCAL_ERROR = "local_error"


class VRootError(Exception):
    """Base exception for all vroot errors."""

    kind: ErrorKind = ErrorKind.LOCAL_ERROR


class RejectionError(VRootError):
    """Raised when a client path cannot be resolved to a confined real path."""


class MalformedPathError(RejectionError):
    """Raised when ``..`` segments would climb above the virtual root."""

    kind = ErrorKind.PERMISSION_DENIED


class UnknownMountError(RejectionError):
    """Raised when the first path segment names no mount of the user."""

    kind = ErrorKind.PERMISSION_DENIED


class CanonicalizationError(RejectionError):
    """Raised when the live filesystem cannot resolve the candidate path."""

    kind = ErrorKind.FILE_NAME_NOT_ALLOWED


class NotAvailableError(RejectionError):
    """Raised when a file or directory is permanently unavailable."""

    kind = ErrorKind.PERMANENT_FILE_NOT_AVAILABLE

    def __init__(self, message: str = "File not available") -> None:
        super().__init__(message)


class EscapeDetectedError(NotAvailableError):
    """Raised when a canonical path lies outside its mount's subtree.

    Reported to clients exactly like :class:`NotAvailableError`; only the type
    differs so that diagnostics can tell the two apart.
    """

    def __init__(self, message: str = "File not available") -> None:
        super().__init__("File not available")
        self.detail = message


class PermissionDeniedError(VRootError):
    """Raised when a write is attempted against a read-only resolution."""

    kind = ErrorKind.PERMISSION_DENIED


class StorageError(VRootError):
    """Raised on local disk I/O failures."""

    kind = ErrorKind.LOCAL_ERROR


class AuthenticationError(VRootError):
    """Raised when a username/password pair is not accepted.

    Subclasses record the specific reason; the message is the same for all of
    them so callers cannot tell an unknown user from a wrong password.
    """

    kind = ErrorKind.PERMISSION_DENIED

    def __init__(self, username: str = "") -> None:
        super().__init__("authentication failed")
        self.username = username


class BadUserError(AuthenticationError):
    """The username is not in the identity store."""


class BadPasswordError(AuthenticationError):
    """The password is missing or does not match."""


class ConfigError(VRootError):
    """Raised when the identity configuration is malformed or unreadable."""
