"""Custom exceptions for lyricsync."""

from enum import Enum
from typing import Optional


class LyricSyncError(Exception):
    """Base exception for lyricsync."""
    pass


class ConfigError(LyricSyncError):
    """Invalid configuration values."""
    pass


class LyricsErrorKind(str, Enum):
    """Externally visible kinds of lyrics failures."""

    NOT_FOUND = "not_found"
    NETWORK_ERROR = "network_error"
    PARSE_ERROR = "parse_error"
    RATE_LIMITED = "rate_limited"
    INVALID_RESPONSE = "invalid_response"


class LyricsError(LyricSyncError):
    """Error fetching or processing lyrics from a provider."""

    kind: LyricsErrorKind = LyricsErrorKind.INVALID_RESPONSE
    default_message = "Invalid response from lyrics provider"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)


class NotFoundError(LyricsError):
    """No lyrics exist for the query."""

    kind = LyricsErrorKind.NOT_FOUND
    default_message = "Lyrics not found"


class RateLimitedError(LyricsError):
    """Provider refused the request because of rate limiting."""

    kind = LyricsErrorKind.RATE_LIMITED
    default_message = "Rate limited, please try again later"


class InvalidResponseError(LyricsError):
    """Provider answered with an unexpected status or shape."""

    kind = LyricsErrorKind.INVALID_RESPONSE


class NetworkError(LyricsError):
    """Transport failure talking to a provider."""

    kind = LyricsErrorKind.NETWORK_ERROR

    def __init__(self, cause: Optional[BaseException] = None):
        self.cause = cause
        detail = str(cause) if cause is not None else "connection failed"
        super().__init__(f"Network error: {detail}")


class ParseError(LyricsError):
    """Provider payload could not be decoded."""

    kind = LyricsErrorKind.PARSE_ERROR

    def __init__(self, detail: str = "malformed payload"):
        self.detail = detail
        super().__init__(f"Parse error: {detail}")
