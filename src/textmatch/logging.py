from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from logging import Logger
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

LOG_FILE_NAME = "textmatch.log"
LOGGER_NAMESPACE = "textmatch"


class UtcFormatter(logging.Formatter):
    """Formatter that renders timestamps in UTC using ISO-8601."""

    converter = time.gmtime

    def formatTime(self, record: logging.LogRecord, datefmt: Optional[str] = None) -> str:
        dt = datetime.fromtimestamp(record.created, tz=timezone.utc)
        if datefmt:
            return dt.strftime(datefmt)
        return dt.isoformat(timespec="seconds")


def configure_logging(
    level: Union[int, str] = logging.WARNING,
    log_dir: Optional[Path] = None,
    max_bytes: int = 10 * 1024 * 1024,  # 10 MB default
    backup_count: int = 3,
) -> Logger:
    """
    Configure the textmatch logger with a console handler and, optionally,
    a rotating file handler.

    Args:
        level: Logging level or level name (default: WARNING)
        log_dir: Directory for the log file; no file log when None
        max_bytes: Maximum size per log file before rotation (default: 10 MB)
        backup_count: Number of backup files to keep (default: 3)

    Returns:
        Configured package logger
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {level}")

    formatter = UtcFormatter(
        fmt="%(asctime)sZ %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )

    root_logger = logging.getLogger(LOGGER_NAMESPACE)
    root_logger.setLevel(level)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_path = log_dir / LOG_FILE_NAME

        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
        root_logger.debug("File logging enabled: %s (max %d bytes, %d backups)",
                          log_path, max_bytes, backup_count)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    return root_logger


def get_logger(name: Optional[str] = None) -> Logger:
    """Return a child logger under the textmatch namespace."""
    base = logging.getLogger(LOGGER_NAMESPACE)
    if name:
        return base.getChild(name)
    return base
