"""Core lyrics acquisition and synchronization modules."""

from .models import (
    Lyrics,
    LyricsLine,
    LyricsSearchQuery,
    LyricsSource,
    LyricsWord,
    SyncState,
    Track,
)
from .lrc import parse_plain, parse_synced
from .providers import LRCLibProvider, LyricsProvider
from .service import LyricsService, LyricsSnapshot
from .session import (
    ClearCache,
    LyricsSession,
    PositionUpdated,
    RefreshRequested,
    TrackChanged,
)
from .sync_engine import SyncEngine

__all__ = [
    "Lyrics",
    "LyricsLine",
    "LyricsSearchQuery",
    "LyricsSource",
    "LyricsWord",
    "SyncState",
    "Track",
    "parse_plain",
    "parse_synced",
    "LRCLibProvider",
    "LyricsProvider",
    "LyricsService",
    "LyricsSnapshot",
    "LyricsSession",
    "TrackChanged",
    "PositionUpdated",
    "RefreshRequested",
    "ClearCache",
    "SyncEngine",
]
