"""Shared fixtures for vroot tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from vroot.fs.local_disk import LocalStorage
from vroot.fs.mounts import BoundDirectory, MountTable
from vroot.fs.resolver import Resolver
from vroot.users import IdentityStore, User

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def srv(tmp_path: Path) -> Path:
    """Real directory tree standing in for /srv/alice.

    Layout::

        srv/alice/photos/beach.jpg
        srv/alice/photos/2024/
        srv/alice/docs/readme.txt
        srv/secret.txt
    """
    root = tmp_path.resolve() / "srv"
    photos = root / "alice" / "photos"
    docs = root / "alice" / "docs"
    (photos / "2024").mkdir(parents=True)
    docs.mkdir(parents=True)
    (photos / "beach.jpg").write_bytes(b"\xff\xd8jpeg")
    (docs / "readme.txt").write_text("read me\n")
    (root / "secret.txt").write_text("top secret\n")
    return root


@pytest.fixture
def alice(srv: Path) -> User:
    """User with a writable ``photos`` mount and a read-only ``docs`` mount."""
    return User(
        name="alice",
        password="wonderland",
        mounts=MountTable.of(
            [
                BoundDirectory("photos", srv / "alice" / "photos"),
                BoundDirectory("docs", srv / "alice" / "docs", read_only=True),
            ]
        ),
    )


@pytest.fixture
def users(alice: User) -> IdentityStore:
    return IdentityStore([alice, User(name="bob", password="builder")])


@pytest.fixture
def resolver() -> Resolver:
    return Resolver()


@pytest.fixture
def storage() -> LocalStorage:
    return LocalStorage()
