"""Lexical path utilities for client-supplied virtual paths."""

from __future__ import annotations

ROOT = "/"
CURRENT_DIR = "."

MAX_PATH_LENGTH = 4096


# =============================================================================
# Path Utilities
# =============================================================================


def normalize_path(path: str) -> str | None:
    """Lexically collapse a client path without touching the filesystem.

    - A leading ``/`` makes the result absolute
    - Drops ``.`` and empty segments (double slashes)
    - ``..`` removes the previous segment
    - Returns ``None`` when ``..`` would climb above the topmost segment

    Examples:
        normalize_path("/a/../b") -> "/b"
        normalize_path("a/./b/") -> "a/b"
        normalize_path("/") -> "/"
        normalize_path("") -> "."
        normalize_path("/../etc") -> None
    """
    absolute = path.startswith(ROOT)
    stack: list[str] = []

    for segment in path.split(ROOT):
        if segment in ("", CURRENT_DIR):
            continue
        if segment == "..":
            if not stack:
                return None
            stack.pop()
            continue
        stack.append(segment)

    if not stack:
        return ROOT if absolute else CURRENT_DIR

    joined = ROOT.join(stack)
    return ROOT + joined if absolute else joined


def split_segments(normalized: str) -> list[str]:
    """Split a normalized path into its segments, ignoring the root marker.

    Examples:
        split_segments("/photos/2024/a.jpg") -> ["photos", "2024", "a.jpg"]
        split_segments("/") -> []
        split_segments(".") -> []
    """
    if normalized.startswith(ROOT):
        normalized = normalized[1:]
    if normalized in ("", CURRENT_DIR):
        return []
    return normalized.split(ROOT)


def validate_path(path: str) -> tuple[bool, str]:
    """Validate a raw client path before normalization.

    Returns:
        (is_valid, error_message) - error_message is empty if valid
    """
    if "\x00" in path:
        return False, "Path contains null bytes"

    if len(path) > MAX_PATH_LENGTH:
        return False, f"Path too long (max {MAX_PATH_LENGTH} characters)"

    return True, ""
