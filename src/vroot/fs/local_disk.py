"""LocalStorage — storage operations over a user's mounts on local disk."""

from __future__ import annotations

import asyncio
import hashlib
import logging
import os
import stat
from collections.abc import AsyncIterable, AsyncIterator
from pathlib import Path
from typing import TYPE_CHECKING

from .exceptions import NotAvailableError, PermissionDeniedError, StorageError, VRootError
from .resolution import (
    ReadableAt,
    Rejected,
    VirtualRoot,
    WritableAt,
    require_readable,
    require_writable,
)
from .resolver import Resolver
from .types import FileEntry, Metadata

if TYPE_CHECKING:
    from vroot.users import User

logger = logging.getLogger(__name__)

CHUNK_SIZE = 4096

FEATURE_RESTART = "restart"
FEATURE_SITEMD5 = "sitemd5"


def _translate_os_error(e: OSError, path: Path | str) -> VRootError:
    """Map an OS error raised during I/O onto the vroot error taxonomy."""
    if isinstance(e, FileNotFoundError):
        return NotAvailableError(f"File not available: {path}")
    if isinstance(e, PermissionError):
        return PermissionDeniedError(f"Permission denied: {path}")
    return StorageError(f"Local error on {path}: {e}")


class LocalStorage:
    """Performs storage operations for a user, confined to that user's mounts.

    Every call resolves its path afresh; read operations accept readable
    resolutions, write operations require a writable one. Blocking I/O runs
    in worker threads so one session never stalls another.

    Raises subclasses of :class:`VRootError` on rejection or I/O failure.
    """

    supported_features = frozenset({FEATURE_RESTART, FEATURE_SITEMD5})

    def __init__(self, resolver: Resolver | None = None) -> None:
        self.resolver = resolver or Resolver()

    async def _readable(self, user: User, path: str) -> Path:
        return require_readable(await self.resolver.resolve(user, path))

    async def _writable(self, user: User, path: str) -> Path:
        return require_writable(await self.resolver.resolve(user, path))

    # =========================================================================
    # Read Operations
    # =========================================================================

    async def metadata(self, user: User, path: str) -> Metadata:
        """Return ``lstat`` metadata for *path*."""
        full_path = await self._readable(user, path)
        try:
            st = await asyncio.to_thread(os.lstat, full_path)
        except OSError as e:
            raise NotAvailableError(f"File not available: {path}") from e
        return Metadata.from_stat(st)

    async def list(self, user: User, path: str) -> list[FileEntry]:
        """List a directory, or the user's mounts at the virtual root."""
        outcome = await self.resolver.resolve(user, path)
        match outcome:
            case VirtualRoot(mounts=mounts):
                return await asyncio.to_thread(self._scan_root, mounts)
            case ReadableAt(real_path=full_path, mount_root=root) | WritableAt(
                real_path=full_path, mount_root=root
            ):
                pass
            case Rejected():
                raise outcome.to_error()
            case _:
                raise TypeError(f"Unexpected resolution outcome: {outcome!r}")

        try:
            return await asyncio.to_thread(self._scan, full_path, root)
        except OSError as e:
            raise _translate_os_error(e, path) from e

    @staticmethod
    def _scan_root(mounts: tuple[tuple[str, Path], ...]) -> list[FileEntry]:
        entries: list[FileEntry] = []
        for name, real_path in mounts:
            try:
                st = os.lstat(real_path)
            except OSError as e:
                raise _translate_os_error(e, real_path) from e
            entries.append(FileEntry(path=Path(name), metadata=Metadata.from_stat(st)))
        return entries

    @staticmethod
    def _scan(full_path: Path, mount_root: Path) -> list[FileEntry]:
        root = Path(os.path.realpath(mount_root))
        entries: list[FileEntry] = []
        with os.scandir(full_path) as it:
            for entry in it:
                try:
                    st = entry.stat(follow_symlinks=False)
                except OSError:
                    continue
                entry_path = Path(entry.path)
                try:
                    rel = entry_path.relative_to(root)
                except ValueError:
                    rel = Path(entry.name)
                entries.append(FileEntry(path=rel, metadata=Metadata.from_stat(st)))
        return entries

    async def get(
        self, user: User, path: str, start_pos: int = 0
    ) -> AsyncIterator[bytes]:
        """Open *path* for reading and return an iterator of byte chunks.

        The file is opened before this returns, so a missing or unreadable
        file raises here rather than on first iteration. The iterator owns the
        open file until it is exhausted or closed; callers that may stop early
        should wrap it::

            async with contextlib.aclosing(await storage.get(user, path)) as stream:
                async for chunk in stream:
                    ...
        """
        full_path = await self._readable(user, path)
        try:
            f = await asyncio.to_thread(open, full_path, "rb")
        except OSError as e:
            raise _translate_os_error(e, path) from e
        if start_pos > 0:
            await asyncio.to_thread(f.seek, start_pos)
        return self._read_chunks(f)

    @staticmethod
    async def _read_chunks(f) -> AsyncIterator[bytes]:
        try:
            while chunk := await asyncio.to_thread(f.read, CHUNK_SIZE):
                yield chunk
        finally:
            await asyncio.to_thread(f.close)

    async def md5(self, user: User, path: str) -> str:
        """Return the hex MD5 digest of the file at *path*."""
        full_path = await self._readable(user, path)

        def _hash() -> str:
            digest = hashlib.md5(usedforsecurity=False)
            with open(full_path, "rb") as f:
                while chunk := f.read(CHUNK_SIZE * 16):
                    digest.update(chunk)
            return digest.hexdigest()

        try:
            return await asyncio.to_thread(_hash)
        except OSError as e:
            raise _translate_os_error(e, path) from e

    async def cwd(self, user: User, path: str) -> None:
        """Check that *path* is a directory the user may change into."""
        full_path = await self._readable(user, path)

        def _check() -> None:
            with os.scandir(full_path):
                pass

        try:
            await asyncio.to_thread(_check)
        except OSError as e:
            raise _translate_os_error(e, path) from e

    # =========================================================================
    # Write Operations
    # =========================================================================

    async def put(
        self,
        user: User,
        data: bytes | AsyncIterable[bytes],
        path: str,
        start_pos: int = 0,
    ) -> int:
        """Write *data* to *path* starting at *start_pos*; return bytes written.

        The file is truncated to *start_pos* first. An abandoned upload leaves
        whatever was written so far.
        """
        full_path = await self._writable(user, path)

        def _open():
            fd = os.open(full_path, os.O_WRONLY | os.O_CREAT, 0o666)
            f = os.fdopen(fd, "wb")
            try:
                f.truncate(start_pos)
                f.seek(start_pos)
            except Exception:
                f.close()
                raise
            return f

        try:
            f = await asyncio.to_thread(_open)
        except OSError as e:
            raise _translate_os_error(e, path) from e

        written = 0
        try:
            if isinstance(data, (bytes, bytearray, memoryview)):
                written = await asyncio.to_thread(f.write, data)
            else:
                async for chunk in data:
                    written += await asyncio.to_thread(f.write, chunk)
            await asyncio.to_thread(f.flush)
        except OSError as e:
            raise _translate_os_error(e, path) from e
        finally:
            await asyncio.to_thread(f.close)

        logger.debug("Wrote %d bytes to %s for %s", written, full_path, user.name)
        return written

    async def delete(self, user: User, path: str) -> None:
        """Delete the file at *path*."""
        full_path = await self._writable(user, path)
        try:
            await asyncio.to_thread(os.remove, full_path)
        except OSError as e:
            raise _translate_os_error(e, path) from e
        logger.debug("Deleted %s for %s", full_path, user.name)

    async def mkdir(self, user: User, path: str) -> None:
        """Create the directory *path*."""
        full_path = await self._writable(user, path)
        try:
            await asyncio.to_thread(os.mkdir, full_path)
        except OSError as e:
            raise _translate_os_error(e, path) from e
        logger.debug("Created directory %s for %s", full_path, user.name)

    async def rmdir(self, user: User, path: str) -> None:
        """Remove the empty directory *path*."""
        full_path = await self._writable(user, path)
        try:
            await asyncio.to_thread(os.rmdir, full_path)
        except OSError as e:
            raise _translate_os_error(e, path) from e
        logger.debug("Removed directory %s for %s", full_path, user.name)

    async def rename(self, user: User, src: str, dest: str) -> None:
        """Rename *src* to *dest*; both must resolve writable.

        Only regular files and directories can be renamed.
        """
        src_path = await self._writable(user, src)
        dest_path = await self._writable(user, dest)

        try:
            st = await asyncio.to_thread(os.lstat, src_path)
        except OSError as e:
            raise NotAvailableError(f"File not available: {src}") from e

        if not (stat.S_ISREG(st.st_mode) or stat.S_ISDIR(st.st_mode)):
            raise NotAvailableError(f"File not available: {src}")

        try:
            await asyncio.to_thread(os.rename, src_path, dest_path)
        except OSError as e:
            raise NotAvailableError(f"Cannot rename {src} to {dest}: {e}") from e
        logger.debug("Renamed %s to %s for %s", src_path, dest_path, user.name)
