"""Filesystem helpers for the backup operation.

The backup logic only needs two things from the host filesystem: an existence
check and a rename. Both go through the ``Filesystem`` protocol so the naming
and error handling can be exercised against an in-memory fake.
"""

from __future__ import annotations

import errno
import os
from pathlib import Path
from typing import Optional

from loguru import logger
from typing_extensions import Protocol, runtime_checkable

from backitup.core.errors import (
    BackupCollisionError,
    BackupError,
    BackupNotFoundError,
    BackupPermissionError,
    CrossDeviceError,
    RenameFailedError,
)


@runtime_checkable
class Filesystem(Protocol):
    """The narrow filesystem interface used by ``backup``."""

    def exists(self, path: str | os.PathLike[str]) -> bool:
        """Return True if any entry (file, directory or symlink) is at path.

        Raise OSError when the answer cannot be known, e.g. the parent
        directory is not readable.
        """
        ...

    def move_entry(self, src: Path, dst: Path) -> None:
        """Rename src to dst without copying its contents."""
        ...


class LocalFilesystem:
    """``Filesystem`` backed by ``os.rename`` on the host."""

    def exists(self, path: str | os.PathLike[str]) -> bool:
        # a dangling symlink still occupies its name; "file/" does not exist
        try:
            os.lstat(path)
        except (FileNotFoundError, NotADirectoryError):
            return False
        return True

    def move_entry(self, src: Path, dst: Path) -> None:
        """Rename src to dst, refusing to replace an existing entry.

        POSIX rename silently replaces a destination file, so the destination
        is re-checked right before the call. The window between the check and
        the rename is not closed.
        """
        if self.exists(dst):
            raise FileExistsError(errno.EEXIST, os.strerror(errno.EEXIST), str(dst))
        os.rename(src, dst)


def translate_os_error(
    exc: OSError, src: Path, dst: Optional[Path] = None
) -> BackupError:
    """Map an OSError from the filesystem onto the backup error taxonomy."""
    code = exc.errno
    reason = exc.strerror or str(exc)

    if isinstance(exc, FileNotFoundError):
        return BackupNotFoundError(
            f"Path does not exist: {reason}.", src, dst, errno_=code
        )
    if isinstance(exc, PermissionError):
        return BackupPermissionError(
            f"Permission denied: {reason}.", src, dst, errno_=code
        )
    if isinstance(exc, FileExistsError) or code == errno.ENOTEMPTY:
        return BackupCollisionError(
            f"Backup destination already exists: {dst}.", src, dst, errno_=code
        )
    if code == errno.EXDEV:
        return CrossDeviceError(
            "Cannot rename across filesystems; backup would require a copy.",
            src,
            dst,
            errno_=code,
        )

    logger.debug(f"Unclassified rename failure ({type(exc).__name__}): {exc}")
    return RenameFailedError(f"Rename failed: {reason}.", src, dst, errno_=code)


def entry_exists(
    fs: Filesystem,
    path: str | os.PathLike[str],
    src: Path,
    dst: Optional[Path] = None,
) -> bool:
    """Ask ``fs`` whether ``path`` exists, reporting failures as backup errors."""
    try:
        return fs.exists(path)
    except BackupError:
        raise
    except OSError as e:
        raise translate_os_error(e, src, dst) from e
