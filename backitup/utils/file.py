"""File utility functions."""

from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path
from typing import Optional

from backitup.core.constants import TIMESTAMP_FORMAT
from backitup.core.errors import InvalidBackupPathError


def safe_timestamp(moment: Optional[datetime] = None) -> str:
    """Returns a timestamp string safe for file names."""
    moment = moment or datetime.now()
    return moment.strftime(TIMESTAMP_FORMAT)


def split_fpath(path: str | os.PathLike[str]) -> tuple[Path, str]:
    """Split a path into its parent directory and base name.

    A bare relative name gets ``Path(".")`` as parent, so joining the two
    again yields a bare relative name.

    Raises:
        InvalidBackupPathError if the path is empty, a filesystem root, or
        has no usable final component (``.``, ``..``, ``foo/..``).
    """
    if not os.fspath(path):
        raise InvalidBackupPathError("Path is empty.", path)

    p = Path(path)
    if p.name == "..":
        raise InvalidBackupPathError("Path ends in '..'.", path)
    if not p.name:
        if p.anchor and p == Path(p.anchor):
            raise InvalidBackupPathError("Path is root.", path)
        raise InvalidBackupPathError("Path has no base name.", path)

    return p.parent, p.name
