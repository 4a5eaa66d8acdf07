"""Data models for lyrics acquisition and playback sync."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class LyricsSource(str, Enum):
    """Where a set of lyrics came from."""

    LRCLIB = "lrclib"
    SPOTIFY = "spotify"
    MUSIXMATCH = "musixmatch"
    LOCAL = "local"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class LyricsWord:
    """A single word with timing information (karaoke-style sync)."""

    start_time: float
    end_time: float
    text: str


@dataclass(frozen=True)
class LyricsLine:
    """A line of lyrics starting at ``start_time`` seconds.

    ``end_time`` of None means the line lasts until the next one starts
    (or forever, for the last line).
    """

    start_time: float
    text: str
    end_time: Optional[float] = None
    words: Optional[Tuple[LyricsWord, ...]] = None


@dataclass(frozen=True)
class Lyrics:
    """Lyrics for one track as returned by a provider."""

    track_id: str
    track_title: str
    artist_name: str
    lines: Tuple[LyricsLine, ...]
    is_synced: bool
    source: LyricsSource = LyricsSource.UNKNOWN

    def __post_init__(self):
        if not isinstance(self.lines, tuple):
            object.__setattr__(self, "lines", tuple(self.lines))


@dataclass(frozen=True)
class Track:
    """Identity of the item playing on the host player."""

    id: str
    title: str
    artist: str
    album: Optional[str] = None
    duration: float = 0.0  # seconds, 0 when unknown


@dataclass(frozen=True)
class LyricsSearchQuery:
    """Lookup key handed to lyrics providers."""

    title: str
    artist: str
    album: Optional[str] = None
    duration: Optional[float] = None

    @classmethod
    def from_track(cls, track: Track) -> "LyricsSearchQuery":
        return cls(
            title=track.title,
            artist=track.artist,
            album=track.album,
            duration=track.duration if track.duration > 0 else None,
        )


@dataclass(frozen=True)
class SyncState:
    """Highlight state derived from playback position."""

    current_line_index: Optional[int] = None
    current_line: Optional[LyricsLine] = None
    upcoming_lines: Tuple[LyricsLine, ...] = field(default_factory=tuple)
