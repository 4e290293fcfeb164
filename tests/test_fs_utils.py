"""Tests for fs/utils.py — lexical path normalization and validation."""

from __future__ import annotations

import pytest

from vroot.fs.utils import normalize_path, split_segments, validate_path

# ---------------------------------------------------------------------------
# normalize_path
# ---------------------------------------------------------------------------


class TestNormalizePath:
    @pytest.mark.parametrize(
        ("input_path", "expected"),
        [
            pytest.param("", ".", id="empty"),
            pytest.param(".", ".", id="current-dir"),
            pytest.param("/", "/", id="root"),
            pytest.param("//", "/", id="double-root"),
            pytest.param("foo.txt", "foo.txt", id="relative"),
            pytest.param("/foo//bar.txt", "/foo/bar.txt", id="double-slashes"),
            pytest.param("/foo/./bar.txt", "/foo/bar.txt", id="dot"),
            pytest.param("/foo/../bar.txt", "/bar.txt", id="dotdot"),
            pytest.param("/foo/", "/foo", id="trailing-slash"),
            pytest.param("a/b/../..", ".", id="relative-collapses-to-current"),
            pytest.param("/a/b/../..", "/", id="absolute-collapses-to-root"),
            pytest.param("/a/b c/ü.txt", "/a/b c/ü.txt", id="verbatim-segments"),
            pytest.param("/a/.../b", "/a/.../b", id="three-dots-is-a-name"),
        ],
    )
    def test_normalize(self, input_path: str, expected: str):
        assert normalize_path(input_path) == expected

    @pytest.mark.parametrize(
        "path",
        [
            pytest.param("..", id="bare-dotdot"),
            pytest.param("/..", id="root-dotdot"),
            pytest.param("/../../etc", id="escape-etc"),
            pytest.param("photos/../../etc/passwd", id="escape-through-mount"),
            pytest.param("a/../..", id="relative-escape"),
            pytest.param("/a/./../../b", id="dot-then-escape"),
        ],
    )
    def test_escape_above_root_fails(self, path: str):
        assert normalize_path(path) is None

    def test_dotdot_collapses_like_direct_path(self):
        assert normalize_path("/a/../b") == normalize_path("/b")

    def test_deterministic(self):
        assert normalize_path("/x/./y/../z") == normalize_path("/x/./y/../z") == "/x/z"


# ---------------------------------------------------------------------------
# split_segments
# ---------------------------------------------------------------------------


class TestSplitSegments:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            pytest.param("/photos/2024/a.jpg", ["photos", "2024", "a.jpg"], id="absolute"),
            pytest.param("photos/a.jpg", ["photos", "a.jpg"], id="relative"),
            pytest.param("/photos", ["photos"], id="mount-only"),
            pytest.param("/", [], id="root"),
            pytest.param(".", [], id="current-dir"),
        ],
    )
    def test_split(self, path: str, expected: list[str]):
        assert split_segments(path) == expected


# ---------------------------------------------------------------------------
# validate_path
# ---------------------------------------------------------------------------


class TestValidatePath:
    def test_valid(self):
        ok, msg = validate_path("/photos/hello.txt")
        assert ok is True
        assert msg == ""

    @pytest.mark.parametrize(
        ("path", "expected_msg"),
        [
            pytest.param("/hello\x00.txt", "null", id="null-byte"),
            pytest.param("/" + "a" * 4096, "long", id="path-too-long"),
        ],
    )
    def test_invalid(self, path: str, expected_msg: str):
        ok, msg = validate_path(path)
        assert ok is False
        assert expected_msg in msg
