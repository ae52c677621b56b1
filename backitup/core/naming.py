"""Backup name synthesis.

A backup of ``<parent>/<base>`` taken at 2023-06-27 21:01:13 local time is
named ``<parent>/#<base>-2023-06-27-21-01-13#``. If that entry already exists
(two backups within the same second) the microsecond component of the same
clock reading is appended once: ``#<base>-2023-06-27-21-01-13-<micros>#``.
There is no further retry.
"""

from __future__ import annotations

import os
import re
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, field_validator

from backitup.core.constants import BACKUP_MARKER, BACKUP_SEPARATOR, TIMESTAMP_FORMAT
from backitup.helpers.filesystem_helpers import (
    Filesystem,
    LocalFilesystem,
    entry_exists,
)
from backitup.utils.file import safe_timestamp, split_fpath

Clock = Callable[[], datetime]

_BACKUP_NAME_RE = re.compile(
    rf"^{re.escape(BACKUP_MARKER)}(?P<base>.+)"
    rf"{re.escape(BACKUP_SEPARATOR)}(?P<timestamp>\d{{4}}(?:-\d{{2}}){{5}})"
    rf"(?:{re.escape(BACKUP_SEPARATOR)}(?P<microseconds>\d{{1,6}}))?"
    rf"{re.escape(BACKUP_MARKER)}$"
)


class BackupName(BaseModel):
    """The decomposed name of a backup entry."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    parent: Path = Path(".")
    base: str
    timestamp: datetime
    microseconds: Optional[int] = Field(default=None, ge=0, le=999_999)

    @field_validator("base")
    @classmethod
    def _single_component(cls, v: str) -> str:
        if not v or v in {".", ".."}:
            raise ValueError("base must be a real file or directory name")
        if os.sep in v or (os.altsep and os.altsep in v):
            raise ValueError("base must not contain a path separator")
        return v

    @property
    def name(self) -> str:
        """The backup's base name, markers included."""
        stamp = safe_timestamp(self.timestamp)
        if self.microseconds is not None:
            stamp = f"{stamp}{BACKUP_SEPARATOR}{self.microseconds}"
        return f"{BACKUP_MARKER}{self.base}{BACKUP_SEPARATOR}{stamp}{BACKUP_MARKER}"

    @property
    def path(self) -> Path:
        """The full backup path, next to the original."""
        return self.parent / self.name

    @property
    def original(self) -> Path:
        """The path the entry had before it was backed up."""
        return self.parent / self.base

    def with_microseconds(self) -> "BackupName":
        """Return the same name disambiguated by the timestamp's microseconds."""
        return self.model_copy(update={"microseconds": self.timestamp.microsecond})


def synthesize_backup_path(
    path: str | os.PathLike[str],
    *,
    clock: Clock = datetime.now,
    fs: Optional[Filesystem] = None,
) -> Path:
    """Return a backup path for ``path`` that does not exist right now.

    Read-only: the filesystem is only asked whether the candidate exists.

    Raises:
        InvalidBackupPathError if ``path`` has no parent/base decomposition.
        BackupPermissionError if the parent directory cannot be inspected.
    """
    if fs is None:
        fs = LocalFilesystem()
    parent, base = split_fpath(path)

    candidate = BackupName(parent=parent, base=base, timestamp=clock())
    if entry_exists(fs, candidate.path, src=Path(path), dst=candidate.path):
        logger.debug(
            f"Backup name {candidate.name!r} is taken; appending microseconds."
        )
        candidate = candidate.with_microseconds()

    return candidate.path


def parse_backup_name(path: str | os.PathLike[str]) -> Optional[BackupName]:
    """Recognise a backup path produced by ``backup``.

    Returns None when the final component is not a backup name.
    """
    p = Path(path)
    match = _BACKUP_NAME_RE.match(p.name)
    if match is None:
        return None

    try:
        timestamp = datetime.strptime(match["timestamp"], TIMESTAMP_FORMAT)
    except ValueError:
        return None

    micros = match["microseconds"]
    return BackupName(
        parent=p.parent,
        base=match["base"],
        timestamp=timestamp.replace(microsecond=int(micros) if micros else 0),
        microseconds=int(micros) if micros else None,
    )
