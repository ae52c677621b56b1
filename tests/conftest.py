"""The main entry point for pytest fixtures.

This will run before any tests are executed when `import pytest` is called.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

import pytest
from loguru import logger

from backitup.core.constants import LOG_FORMAT


def _setup_logging() -> None:
    """Add a file sink to the default pytest console logging."""
    # logs/pytest_YYYYMMDD.log
    logs_dir = Path(__file__).resolve().parent.parent / "logs"
    logs_dir.mkdir(exist_ok=True)
    logfile = logs_dir / f"pytest_{datetime.now():%Y%m%d}.log"

    # Add file sink to existing pytest console handler
    logger.add(
        logfile,
        level="DEBUG",
        format=LOG_FORMAT,
        rotation="00:00",
        retention="7 days",
        compression="zip",
    )

    # Intercept stdlib logging so everything funnels through Loguru
    class InterceptHandler(logging.Handler):
        def emit(self, record: logging.LogRecord) -> None:
            try:
                level = logger.level(record.levelname).name
            except ValueError:
                level = logging.getLevelName(record.levelno)
            logger.opt(depth=6, exception=record.exc_info, colors=False).log(
                level, record.getMessage()
            )

    # Force stdlib logging to go through our intercept handler
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)


def pytest_configure(config: pytest.Config) -> None:
    """Pytest configuration hook to add a file sink to default pytest logging."""
    _setup_logging()


class MemoryFilesystem:
    """In-memory stand-in for the host filesystem.

    Entries map a path to its content. Set ``fail_with`` to make
    ``move_entry`` raise instead of moving, and ``exists_fails_with`` to make
    ``exists`` raise instead of answering.
    """

    def __init__(self) -> None:
        self.entries: dict[Path, str] = {}
        self.fail_with: Optional[OSError] = None
        self.exists_fails_with: Optional[OSError] = None
        self.moves: list[tuple[Path, Path]] = []

    def add(self, path: str | Path, content: str = "") -> Path:
        p = Path(path)
        self.entries[p] = content
        return p

    def __len__(self) -> int:
        return len(self.entries)

    def exists(self, path: str | Path) -> bool:
        if self.exists_fails_with is not None:
            raise self.exists_fails_with
        return Path(path) in self.entries

    def move_entry(self, src: Path, dst: Path) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        if dst in self.entries:
            raise FileExistsError(17, "File exists", str(dst))
        if src not in self.entries:
            raise FileNotFoundError(2, "No such file or directory", str(src))
        self.entries[dst] = self.entries.pop(src)
        self.moves.append((src, dst))


@pytest.fixture
def memory_fs() -> MemoryFilesystem:
    """An empty in-memory filesystem."""
    return MemoryFilesystem()


@pytest.fixture
def fixed_clock() -> Callable[..., Callable[[], datetime]]:
    """Build a clock that always returns the same local time.

    Defaults to 2023-06-27 21:01:13.
    """

    def _make(microsecond: int = 0, second: int = 13) -> Callable[[], datetime]:
        moment = datetime(2023, 6, 27, 21, 1, second, microsecond)
        return lambda: moment

    return _make


@pytest.fixture
def in_tmp(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test with tmp_path as the working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path
