"""Back up files and directories by renaming them to timestamped names."""

from .core.backup import backup
from .core.errors import (
    BackupCollisionError,
    BackupError,
    BackupNotFoundError,
    BackupPermissionError,
    CrossDeviceError,
    InvalidBackupPathError,
    RenameFailedError,
)
from .core.naming import BackupName, parse_backup_name, synthesize_backup_path

__all__ = [
    "backup",
    "synthesize_backup_path",
    "parse_backup_name",
    "BackupName",
    "BackupError",
    "BackupNotFoundError",
    "BackupPermissionError",
    "InvalidBackupPathError",
    "RenameFailedError",
    "CrossDeviceError",
    "BackupCollisionError",
]
