"""Logging setup - rotating log file in the data directory plus console output."""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# private global
_LOG_FILE: Optional[Path] = None


def setup_logging(
    log_path: Path,
    level: str | int = logging.INFO,
    max_bytes: int = 2 * 1024 * 1024,
    backup_count: int = 5,
) -> Path:
    """
    Set up rotating file logging plus a console handler.
    - max_bytes: max size per log file (default 2 MB)
    - backup_count: number of rotated log files to keep (default 5)

    Unknown level names fall back to INFO.
    """
    global _LOG_FILE
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    log_path = Path(log_path)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    _LOG_FILE = log_path

    formatter = logging.Formatter(LOG_FORMAT)

    file_handler = RotatingFileHandler(log_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)
    return log_path


def get_log_file() -> Optional[Path]:
    """The current log file, or None before setup_logging() has run."""
    return _LOG_FILE
