"""Command-line entry point: credential digests and configuration checks.

Usage:
    vroot hash-password [PASSWORD]
    vroot check-config CONFIG
    vroot resolve [--config CONFIG] USER PATH
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from vroot import config
from vroot._namespace import Namespace
from vroot.fs.exceptions import ConfigError
from vroot.fs.resolution import ReadableAt, Rejected, VirtualRoot, WritableAt
from vroot.passwords import hash_password


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def _cmd_hash_password(args: argparse.Namespace) -> int:
    password = args.password
    if password is None:
        password = sys.stdin.readline().rstrip("\n")
    if not password:
        print("error: empty password", file=sys.stderr)
        return 1
    print(hash_password(password))
    return 0


def _cmd_check_config(args: argparse.Namespace) -> int:
    store = config.load(args.config)
    for name, user in store.items():
        mounts = ", ".join(
            f"{m.name}{'' if m.permission.can_write else ' (ro)'}" for m in user.mounts.values()
        )
        print(f"{name}: {mounts or '(no mounts)'}")
    return 0


def _cmd_resolve(args: argparse.Namespace) -> int:
    users = config.load(args.config) if args.config else config.default_identity_store()
    user = users.get(args.user)
    if user is None:
        print(f"error: unknown user {args.user!r}", file=sys.stderr)
        return 1

    outcome = asyncio.run(Namespace(users).resolve(user, args.path))
    match outcome:
        case WritableAt(real_path=path):
            print(f"writable {path}")
        case ReadableAt(real_path=path):
            print(f"readable {path}")
        case VirtualRoot(mounts=mounts):
            print("root " + " ".join(f"{name}={path}" for name, path in mounts))
        case Rejected(reason=reason):
            print(f"rejected {reason.value}")
            return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="vroot", description="Per-user virtual mount namespace")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="more logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("hash-password", help="print a digest for the configuration file")
    p.add_argument("password", nargs="?", help="plaintext (read from stdin if omitted)")
    p.set_defaults(func=_cmd_hash_password)

    p = sub.add_parser("check-config", help="validate a configuration file")
    p.add_argument("config")
    p.set_defaults(func=_cmd_check_config)

    p = sub.add_parser("resolve", help="show how a path resolves for a user")
    p.add_argument("--config", "-c", default=None)
    p.add_argument("user")
    p.add_argument("path")
    p.set_defaults(func=_cmd_resolve)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)
    try:
        return args.func(args)
    except ConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
