"""Lyrics orchestration for the currently playing track.

``LyricsService`` decides which lyrics are shown: it reacts to track changes,
serves repeat plays from an in-memory cache, tries providers in priority
order on a miss, and feeds the result into the ``SyncEngine``.

Every fetch is tagged with a request token. A response that arrives after
a newer track change has superseded its request is still cached under its
own track id, but it is never published.
"""

import asyncio
import inspect
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Tuple

from ..exceptions import LyricsError, LyricsErrorKind
from ..utils.logging import get_logger
from .models import Lyrics, LyricsLine, LyricsSearchQuery, SyncState, Track
from .providers import LyricsProvider, default_providers, sort_providers
from .sync_engine import SyncEngine

logger = get_logger(__name__)


@dataclass(frozen=True)
class LyricsSnapshot:
    """Everything a renderer needs to draw the lyrics view."""

    track_id: Optional[str]
    lyrics: Optional[Lyrics]
    is_loading: bool
    error: Optional[LyricsErrorKind]
    current_line_index: Optional[int]
    current_line: Optional[LyricsLine]
    upcoming_lines: Tuple[LyricsLine, ...]


SnapshotListener = Callable[[LyricsSnapshot], None]
RequestToken = Tuple[str, int]


class LyricsService:
    """Coordinates providers, cache and sync engine for one playback session."""

    def __init__(
        self,
        providers: Optional[Iterable[LyricsProvider]] = None,
        sync_engine: Optional[SyncEngine] = None,
    ):
        self.providers: List[LyricsProvider] = sort_providers(
            providers if providers is not None else default_providers()
        )
        self.sync_engine = sync_engine or SyncEngine()

        self.cache: Dict[str, Lyrics] = {}
        self.current_track: Optional[Track] = None
        self.current_lyrics: Optional[Lyrics] = None
        self.is_loading = False
        self.last_error: Optional[LyricsErrorKind] = None

        self._generation = 0
        self._active_request: Optional[RequestToken] = None
        self._listeners: List[SnapshotListener] = []
        self._batch_depth = 0
        self.sync_engine.subscribe(self._on_sync_state)

    @property
    def current_track_id(self) -> Optional[str]:
        return self.current_track.id if self.current_track is not None else None

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    def snapshot(self) -> LyricsSnapshot:
        state = self.sync_engine.state
        return LyricsSnapshot(
            track_id=self.current_track_id,
            lyrics=self.current_lyrics,
            is_loading=self.is_loading,
            error=self.last_error,
            current_line_index=state.current_line_index,
            current_line=state.current_line,
            upcoming_lines=state.upcoming_lines,
        )

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register ``listener`` for snapshots; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        if self._batch_depth or not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)

    def _on_sync_state(self, state: SyncState) -> None:
        self._notify()

    @contextmanager
    def _batch(self) -> Iterator[None]:
        """Collapse several state mutations into one snapshot notification."""
        self._batch_depth += 1
        try:
            yield
        finally:
            self._batch_depth -= 1
        self._notify()

    # ------------------------------------------------------------------
    # Track changes
    # ------------------------------------------------------------------

    def begin_track_change(self, track: Optional[Track]) -> Optional[RequestToken]:
        """Apply the part of a track change that needs no network.

        Clears state for ``None``, ignores a repeated id, and publishes a
        cache hit straight away. On a cache miss the service enters Loading
        and the returned token must be handed to ``fetch_from_providers()``.
        """
        if track is None:
            self._supersede_active_request()
            with self._batch():
                self.current_track = None
                self.current_lyrics = None
                self.is_loading = False
                self.last_error = None
                self.sync_engine.reset()
            return None

        if track.id == self.current_track_id:
            return None

        self.current_track = track

        cached = self.cache.get(track.id)
        if cached is not None:
            logger.info(f"Using cached lyrics for: {track.title}")
            self._supersede_active_request()
            with self._batch():
                self.current_lyrics = cached
                self.is_loading = False
                self.last_error = None
                self.sync_engine.set_lyrics(cached)
            return None

        return self.begin_fetch(track)

    async def handle_track_change(self, track: Optional[Track]) -> None:
        """React to the host player reporting a (possibly absent) track."""
        token = self.begin_track_change(track)
        if token is not None:
            await self.fetch_from_providers(track, token)

    async def fetch_lyrics(self, track: Track) -> Optional[Lyrics]:
        """Force a fetch for ``track``, bypassing the cache lookup."""
        token = self.begin_fetch(track)
        return await self.fetch_from_providers(track, token)

    async def refresh(self) -> Optional[Lyrics]:
        """Re-fetch lyrics for the current track, if there is one."""
        if self.current_track is None:
            return None
        return await self.fetch_lyrics(self.current_track)

    def clear_cache(self) -> None:
        """Drop all cached lyrics; what is on screen stays as it is."""
        self.cache.clear()
        logger.debug("Lyrics cache cleared")

    def update_position(self, position: float) -> bool:
        return self.sync_engine.update_position(position)

    # ------------------------------------------------------------------
    # Fetching
    # ------------------------------------------------------------------

    def _supersede_active_request(self) -> None:
        self._generation += 1
        self._active_request = None

    def _is_active(self, token: RequestToken) -> bool:
        return self._active_request == token

    def begin_fetch(self, track: Track) -> RequestToken:
        """Make ``track`` the active request and enter Loading."""
        self._generation += 1
        token = (track.id, self._generation)
        self._active_request = token
        self.current_track = track

        with self._batch():
            self.is_loading = True
            self.last_error = None
            self.current_lyrics = None
            self.sync_engine.set_lyrics(None)
        return token

    async def fetch_from_providers(
        self, track: Track, token: RequestToken
    ) -> Optional[Lyrics]:
        """Try providers for ``track``; publish only while ``token`` is active."""
        query = LyricsSearchQuery.from_track(track)
        logger.info(f"Fetching lyrics for: {query.title} by {query.artist}")

        for provider in self.providers:
            if not provider.is_available():
                logger.debug(f"Skipping unavailable provider {provider.name}")
                continue

            try:
                lyrics = await self._call_provider(provider, query)
            except LyricsError as e:
                logger.warning(f"Provider {provider.name} failed: {e}")
            except Exception as e:
                logger.error(f"Provider {provider.name} error: {e}")
            else:
                logger.info(f"Found lyrics from {provider.name}")
                self.cache[track.id] = lyrics
                if not self._is_active(token):
                    logger.info(f"Discarding stale lyrics for: {track.title}")
                    return lyrics
                with self._batch():
                    self.current_lyrics = lyrics
                    self.is_loading = False
                    self.sync_engine.set_lyrics(lyrics)
                self._active_request = None
                return lyrics

            if not self._is_active(token):
                logger.debug(f"Fetch for {track.title} superseded, stopping")
                return None

        if self._is_active(token):
            with self._batch():
                self.is_loading = False
                self.last_error = LyricsErrorKind.NOT_FOUND
            self._active_request = None
            logger.info(f"No lyrics found for: {query.title}")
        return None

    async def _call_provider(
        self, provider: LyricsProvider, query: LyricsSearchQuery
    ) -> Lyrics:
        if inspect.iscoroutinefunction(provider.fetch_lyrics):
            return await provider.fetch_lyrics(query)
        return await asyncio.to_thread(provider.fetch_lyrics, query)
