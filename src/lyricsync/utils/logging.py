"""Logging configuration for lyricsync."""

import logging
import sys
from pathlib import Path
from typing import Optional

from ..config import get_log_file, get_log_level

PACKAGE_LOGGER = "lyricsync"

# HTTP and event-loop internals log every request/tick at DEBUG
_QUIET_LOGGERS = ("urllib3", "requests", "asyncio")

_SHORT_FORMAT = "%(levelname)s: %(message)s"
_VERBOSE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[Path] = None,
    verbose: bool = False,
) -> logging.Logger:
    """Configure the package logger.

    Args:
        level: Level name; defaults to LYRICSYNC_LOG_LEVEL or INFO
        log_file: Optional file to mirror console output into
        verbose: Include timestamps and logger names in each record

    Returns:
        The configured ``lyricsync`` logger
    """
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(getattr(logging, (level or get_log_level()).upper()))
    logger.handlers.clear()

    formatter = logging.Formatter(_VERBOSE_FORMAT if verbose else _SHORT_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    log_file = log_file or get_log_file()
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = PACKAGE_LOGGER) -> logging.Logger:
    """Get logger instance."""
    return logging.getLogger(name)
