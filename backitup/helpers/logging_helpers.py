"""Logging helpers for backitup.

The package logs through loguru and never adds sinks on import. Applications
that want the package's log lines on disk call ``configure_logger`` once.
"""

import sys
from pathlib import Path
from typing import Optional, Union

from loguru import logger

from backitup.core.constants import LOG_FORMAT, LOG_RETENTION


def configure_logger(
    source: str,
    logs_dir: Union[str, Path, None] = "logs",
    console_level: Optional[str] = "ERROR",
) -> Optional[Path]:
    """Configure Loguru logging.

    Returns the file sink path pattern, or None when ``logs_dir`` is None.
    """
    # Clear any previously added handlers
    logger.remove()

    if console_level is not None:
        logger.add(sink=sys.stderr, level=console_level, format=LOG_FORMAT)

    if logs_dir is None:
        logger.info(f"Logger configured for source '{source}' (console only).")
        return None

    # File handler: DEBUG+, rotated daily, zipped
    logs_path = Path(logs_dir)
    logs_path.mkdir(parents=True, exist_ok=True)

    log_path = logs_path / f"{source}_{'{time:YYYYMMDD}'}.log"

    logger.add(
        sink=str(log_path),
        level="DEBUG",
        format=LOG_FORMAT,
        rotation="00:00",
        retention=LOG_RETENTION,
        compression="zip",
    )

    logger.info(
        f"Logger configured for source '{source}'. "
        f"Sinks: stderr (level={console_level}+), file (level=DEBUG+) at '{log_path}'. "
        f"Rotation daily at midnight, retention {LOG_RETENTION}, zipped."
    )
    return log_path
