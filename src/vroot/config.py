"""Load the IdentityStore from a YAML configuration file.

Expected shape (a top-level ``users:`` key holding the list is also accepted)::

    - name: alice
      password: "pbkdf2_sha256$260000$<salt>$<hash>"
      mounts:
        photos:
          path: /srv/alice/photos
        docs:
          path: /srv/alice/docs
          read_only: true

``mounts`` may also be a list of ``{name, path, read_only}`` mappings.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from vroot.fs.exceptions import ConfigError
from vroot.fs.mounts import BoundDirectory, MountTable
from vroot.users import IdentityStore, User

logger = logging.getLogger(__name__)


def load(path: Path | str) -> IdentityStore:
    """Read and parse the configuration at *path*."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read configuration {path}: {e}") from e
    store = parse(text)
    logger.info("Loaded %d user(s) from %s", len(store), path)
    return store


def parse(text: str) -> IdentityStore:
    """Parse a YAML configuration document into an IdentityStore."""
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML: {e}") from e

    if isinstance(document, dict) and "users" in document:
        document = document["users"]
    if document is None:
        document = []
    if not isinstance(document, list):
        raise ConfigError("Configuration must be a list of users")

    return IdentityStore(_parse_user(entry, index) for index, entry in enumerate(document))


def _parse_user(entry: Any, index: int) -> User:
    if not isinstance(entry, dict):
        raise ConfigError(f"User #{index} must be a mapping")

    name = _require_str(entry, "name", f"user #{index}")
    where = f"user {name!r}"
    password = _require_str(entry, "password", where)

    raw_mounts = entry.get("mounts", entry.get("access", {}))
    if raw_mounts is None:
        raw_mounts = {}

    if isinstance(raw_mounts, dict):
        items = []
        for mount_name, options in raw_mounts.items():
            if not isinstance(options, dict):
                raise ConfigError(f"Mount {mount_name!r} of {where} must be a mapping")
            items.append({**options, "name": mount_name})
    elif isinstance(raw_mounts, list):
        items = raw_mounts
    else:
        raise ConfigError(f"Mounts of {where} must be a mapping or a list")

    mounts = MountTable.of(_parse_mount(item, where) for item in items)
    return User(name=name, password=password, mounts=mounts)


def _parse_mount(item: Any, where: str) -> BoundDirectory:
    if not isinstance(item, dict):
        raise ConfigError(f"Mount entries of {where} must be mappings")

    name = item.get("name")
    if not isinstance(name, str):
        raise ConfigError(f"Mount of {where} is missing a string 'name'")
    path = _require_str(item, "path", f"mount {name!r} of {where}")

    read_only = item.get("read_only", False)
    if not isinstance(read_only, bool):
        raise ConfigError(f"'read_only' of mount {name!r} of {where} must be true or false")

    return BoundDirectory(name=name, real_path=Path(path), read_only=read_only)


def _require_str(entry: dict[str, Any], key: str, where: str) -> str:
    value = entry.get(key)
    if value is None:
        raise ConfigError(f"{where} is missing {key!r}")
    if not isinstance(value, str):
        raise ConfigError(
            f"{key!r} of {where} must be a string; quote values such as {value!r} in the YAML"
        )
    return value


def default_identity_store() -> IdentityStore:
    """A development identity store: one user, one directory mounted twice."""
    home = Path.home()
    return IdentityStore(
        [
            User(
                name="dev",
                password="password",
                mounts=MountTable.of(
                    [
                        BoundDirectory("home-read", home, read_only=True),
                        BoundDirectory("home-write", home),
                    ]
                ),
            )
        ]
    )
