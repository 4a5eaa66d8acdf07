"""Configuration settings for lyricsync."""

import os
from pathlib import Path
from typing import Optional

from . import __version__
from .exceptions import ConfigError

# Providers (can be overridden via environment variables)
LRCLIB_BASE_URL = os.getenv("LYRICSYNC_LRCLIB_BASE_URL", "https://lrclib.net/api")
HTTP_TIMEOUT = float(os.getenv("LYRICSYNC_HTTP_TIMEOUT", "10"))
USER_AGENT = os.getenv("LYRICSYNC_USER_AGENT", f"lyricsync/{__version__}")

# Provider priorities (higher is tried first)
LRCLIB_PRIORITY = 100

# Sync engine
UPCOMING_LINE_COUNT = int(os.getenv("LYRICSYNC_UPCOMING_LINES", "3"))

DEFAULT_LOG_LEVEL = "INFO"


def validate_config() -> None:
    """Validate configuration values."""
    if not LRCLIB_BASE_URL.startswith(("http://", "https://")):
        raise ConfigError(f"Invalid LRCLIB base URL: {LRCLIB_BASE_URL}")

    if HTTP_TIMEOUT <= 0:
        raise ConfigError("HTTP timeout must be positive")

    if UPCOMING_LINE_COUNT < 0:
        raise ConfigError("Upcoming line count must not be negative")


def get_log_level() -> str:
    """Get log level from environment or default."""
    return os.getenv("LYRICSYNC_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()


def get_log_file() -> Optional[Path]:
    """Get optional log file path from environment."""
    log_file = os.getenv("LYRICSYNC_LOG_FILE")
    if log_file:
        return Path(log_file)
    return None


# Validate config on import
validate_config()
