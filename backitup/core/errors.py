"""Exceptions raised by the backup operation.

Every error is a ``BackupError``, which is itself an ``OSError`` so callers
that already guard filesystem calls with ``except OSError`` keep working.
Where a builtin exception describes the same failure, the class derives from
it as well (e.g. ``BackupNotFoundError`` is a ``FileNotFoundError``).

The source path is stored in ``filename`` and, once known, the destination
in ``filename2``.
"""

from __future__ import annotations

import errno
import os
from typing import Optional, Union

PathArg = Union[str, "os.PathLike[str]"]


class BackupError(OSError):
    """Base class for all backup failures."""

    default_errno: Optional[int] = None

    def __init__(
        self,
        message: str,
        path: Optional[PathArg] = None,
        destination: Optional[PathArg] = None,
        *,
        errno_: Optional[int] = None,
    ) -> None:
        code = errno_ if errno_ is not None else self.default_errno
        super().__init__(code, message)
        self.message = message
        self.filename = os.fspath(path) if path is not None else None
        self.filename2 = os.fspath(destination) if destination is not None else None

    def __str__(self) -> str:
        return self.message


class BackupNotFoundError(BackupError, FileNotFoundError):
    """The path to back up does not exist."""

    default_errno = errno.ENOENT


class BackupPermissionError(BackupError, PermissionError):
    """The process may not read the parent directory or perform the rename."""

    default_errno = errno.EACCES


class InvalidBackupPathError(BackupError, ValueError):
    """The path cannot be split into a parent directory and a base name."""

    default_errno = errno.EINVAL


class RenameFailedError(BackupError):
    """The rename primitive refused the move."""


class CrossDeviceError(RenameFailedError):
    """Source and destination live on different filesystems.

    No copy-and-delete fallback is attempted.
    """

    default_errno = errno.EXDEV


class BackupCollisionError(RenameFailedError, FileExistsError):
    """The synthesized destination became occupied before the rename."""

    default_errno = errno.EEXIST
