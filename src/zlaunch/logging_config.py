"""Logging configuration for the zlaunch CLI.

A launch spans several processes (the launcher, its forked child, the
client it spawns), so every record carries the pid of the process that
wrote it. All of them append to one rotating log file.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

_log_dir: Path | None = None
_handler: RotatingFileHandler | None = None

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | pid %(process)d | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_NAME = "zlaunch.log"


def get_log_dir() -> Path:
    """Get the logging directory, creating it if necessary."""
    global _log_dir  # noqa: PLW0603
    if _log_dir is None:
        _log_dir = Path.home() / ".zlaunch" / "logs"
    _log_dir.mkdir(parents=True, exist_ok=True)
    return _log_dir


def get_log_file() -> Path:
    """Path of the shared launcher log."""
    return get_log_dir() / LOG_FILE_NAME


def setup_logging(verbose: bool = False) -> None:
    """Attach the rotating file handler to the ``zlaunch`` logger.

    Safe to call more than once; later calls only adjust verbosity. Call it
    before loading configuration so config warnings reach the log file.
    """
    global _handler  # noqa: PLW0603
    if _handler is not None:
        set_verbose(verbose)
        return

    root_logger = logging.getLogger("zlaunch")
    root_logger.setLevel(logging.DEBUG)  # Capture everything; the handler filters
    root_logger.handlers.clear()

    _handler = RotatingFileHandler(
        get_log_file(),
        maxBytes=1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    _handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))
    root_logger.addHandler(_handler)
    set_verbose(verbose)


def set_verbose(verbose: bool) -> None:
    """Switch the log file between DEBUG and INFO."""
    if _handler is not None:
        _handler.setLevel(logging.DEBUG if verbose else logging.INFO)


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a specific module.

    Args:
        name: Module name (e.g., "zlaunch.services.prober")

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)
