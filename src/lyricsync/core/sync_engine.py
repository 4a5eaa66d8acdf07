"""Maps playback position to the active lyric line.

The engine keeps a sorted list of line start times so each position update
is a binary search. Listeners are only notified when the resolved line index
actually changes, so a steady 1 Hz position feed does not churn the UI.
"""

from bisect import bisect_right
from typing import Callable, List, Optional

from .. import config
from ..utils.logging import get_logger
from .models import Lyrics, LyricsLine, SyncState

logger = get_logger(__name__)

SyncListener = Callable[[SyncState], None]


class SyncEngine:
    """Tracks the current and upcoming lyric lines for one lyrics set."""

    def __init__(self, upcoming_line_count: Optional[int] = None):
        if upcoming_line_count is None:
            upcoming_line_count = config.UPCOMING_LINE_COUNT
        if upcoming_line_count < 0:
            raise ValueError("upcoming_line_count must not be negative")
        self.upcoming_line_count = upcoming_line_count

        self.lyrics: Optional[Lyrics] = None
        self.current_line_index: Optional[int] = None
        self.current_line: Optional[LyricsLine] = None
        self.upcoming_lines: List[LyricsLine] = []

        self._start_times: List[float] = []
        self._chained = True
        self._listeners: List[SyncListener] = []

    @property
    def state(self) -> SyncState:
        return SyncState(
            current_line_index=self.current_line_index,
            current_line=self.current_line,
            upcoming_lines=tuple(self.upcoming_lines),
        )

    def subscribe(self, listener: SyncListener) -> Callable[[], None]:
        """Register ``listener`` for state changes; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_lyrics(self, lyrics: Optional[Lyrics]) -> None:
        """Replace the active lyrics and seed the lookahead from the first line."""
        self.lyrics = lyrics
        self.current_line_index = None
        self.current_line = None
        self.upcoming_lines = []
        self._index_lines(lyrics)

        if lyrics is not None and lyrics.lines:
            self._update_upcoming_lines(0)
        self._notify()

    def update_position(self, position: float) -> bool:
        """
        Resolve the line active at ``position`` seconds.

        Returns:
            True if the current line changed, False otherwise (including
            when no lyrics are loaded or the lyrics are unsynced).
        """
        lyrics = self.lyrics
        if lyrics is None or not lyrics.is_synced:
            return False

        new_index = self._find_line_index(position)
        if new_index == self.current_line_index:
            return False

        self.current_line_index = new_index
        self.current_line = lyrics.lines[new_index] if new_index is not None else None
        self._update_upcoming_lines((new_index if new_index is not None else -1) + 1)
        logger.debug(f"Lyrics line changed to {new_index} at {position:.2f}s")
        self._notify()
        return True

    def reset(self) -> None:
        """Clear all state unconditionally."""
        self.lyrics = None
        self.current_line_index = None
        self.current_line = None
        self.upcoming_lines = []
        self._index_lines(None)
        self._notify()

    def _index_lines(self, lyrics: Optional[Lyrics]) -> None:
        lines = lyrics.lines if lyrics is not None else ()
        self._start_times = [line.start_time for line in lines]
        self._chained = all(
            current.start_time <= following.start_time
            and (current.end_time is None or current.end_time <= following.start_time)
            for current, following in zip(lines, lines[1:])
        )

    def _effective_end(self, index: int) -> float:
        lines = self.lyrics.lines if self.lyrics is not None else ()
        end_time = lines[index].end_time
        if end_time is not None:
            return end_time
        if index + 1 < len(lines):
            return lines[index + 1].start_time
        return float("inf")

    def _find_line_index(self, position: float) -> Optional[int]:
        lines = self.lyrics.lines if self.lyrics is not None else ()
        if not lines or position < lines[0].start_time:
            return None

        if self._chained:
            # Chained lines never overlap, so the last line starting at or
            # before position is the only one that can contain it.
            index = bisect_right(self._start_times, position) - 1
            if position < self._effective_end(index):
                return index
            return len(lines) - 1

        for index, line in enumerate(lines):
            if line.start_time <= position < self._effective_end(index):
                return index
        return len(lines) - 1

    def _update_upcoming_lines(self, start_index: int) -> None:
        lines = self.lyrics.lines if self.lyrics is not None else ()
        if start_index >= len(lines):
            self.upcoming_lines = []
            return
        end_index = min(start_index + self.upcoming_line_count, len(lines))
        self.upcoming_lines = list(lines[start_index:end_index])

    def _notify(self) -> None:
        if not self._listeners:
            return
        state = self.state
        for listener in list(self._listeners):
            listener(state)
