"""Constants for core module."""

# --- Backup naming --- #
# Backup names look like "#<base>-<timestamp>#" or
# "#<base>-<timestamp>-<microseconds>#" on a same-second collision.
BACKUP_MARKER: str = "#"
BACKUP_SEPARATOR: str = "-"

# Local wall-clock time, e.g. 2023-06-27-21-01-13
TIMESTAMP_FORMAT: str = "%Y-%m-%d-%H-%M-%S"

# --- Logging --- #
LOG_FORMAT: str = (
    "{time:YYYY-MM-DD HH:mm:ss} | {level:^7} | {file.name}:{line} | {message}"
)
LOG_RETENTION: str = "7 days"
