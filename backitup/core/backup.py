"""The backup operation.

``backup`` renames a file or directory to a timestamped name in the same
directory so the original path is free to be written again. Contents are never
copied: a directory keeps its inode and everything below it.
"""

from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path
from typing import Optional

from loguru import logger

from backitup.core.errors import (
    BackupError,
    BackupNotFoundError,
    InvalidBackupPathError,
)
from backitup.core.naming import Clock, synthesize_backup_path
from backitup.helpers.filesystem_helpers import (
    Filesystem,
    LocalFilesystem,
    entry_exists,
    translate_os_error,
)


def backup(
    path: str | os.PathLike[str],
    *,
    clock: Clock = datetime.now,
    fs: Optional[Filesystem] = None,
) -> Path:
    """Back up a file or directory by renaming it.

    Args:
        path: the file or directory to back up.
        clock: source of the local time used in the backup name.
        fs: filesystem to operate on (defaults to the host filesystem).

    Returns:
        The path the entry now lives at, e.g. ``#data.txt-2023-06-27-21-01-13#``.

    Raises:
        InvalidBackupPathError: path is empty, a root, or ends in '..'.
        BackupNotFoundError: nothing exists at path.
        BackupPermissionError: the parent directory cannot be inspected or the
            rename is not permitted.
        CrossDeviceError: the rename would cross filesystems.
        BackupCollisionError: the backup name was taken before the rename.
        RenameFailedError: any other refusal from the rename primitive.

    On any error the original entry is left where it was.
    """
    if fs is None:
        fs = LocalFilesystem()

    raw = os.fspath(path)
    if not raw:
        raise InvalidBackupPathError("Path is empty.", path)

    # checked on the raw path so "file.txt/" is not taken for "file.txt"
    src = Path(raw)
    try:
        if not entry_exists(fs, raw, src):
            raise BackupNotFoundError("Path does not exist.", src)
        dst = synthesize_backup_path(src, clock=clock, fs=fs)
    except BackupError as e:
        logger.warning(f"Failed to back up '{src}': {e}")
        raise

    try:
        fs.move_entry(src, dst)
    except BackupError as e:
        logger.warning(f"Failed to back up '{src}' to '{dst}': {e}")
        raise
    except OSError as e:
        err = translate_os_error(e, src, dst)
        logger.warning(f"Failed to back up '{src}' to '{dst}': {err}")
        raise err from e

    logger.info(f"Backed up '{src}' to '{dst}'.")
    return dst
