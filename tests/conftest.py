"""Test configuration and fixtures.

Provides reusable fixtures for:
- LRC (synced lyrics) and plain lyrics text
- LRCLIB API responses
- Track and Lyrics objects
- Scriptable fake lyrics providers
"""

import asyncio
import os
from typing import Callable, Dict, List, Optional
from unittest.mock import Mock

import pytest

from lyricsync.core.models import (
    Lyrics,
    LyricsLine,
    LyricsSearchQuery,
    LyricsSource,
    Track,
)
from lyricsync.core.providers import LyricsProvider
from lyricsync.exceptions import NotFoundError


def pytest_addoption(parser):
    parser.addoption(
        "--run-network",
        action="store_true",
        default=False,
        help="Run tests that require network access",
    )


def pytest_collection_modifyitems(config, items):
    run_network = config.getoption("--run-network") or os.getenv(
        "RUN_INTEGRATION_TESTS"
    ) == "1"
    if run_network:
        return

    skip_network = pytest.mark.skip(
        reason="requires network access (use --run-network or RUN_INTEGRATION_TESTS=1)"
    )
    for item in items:
        if "network" in item.keywords:
            item.add_marker(skip_network)


# =============================================================================
# Lyrics Text Fixtures
# =============================================================================


@pytest.fixture
def lrc_bohemian_rhapsody():
    """Synced LRC lyrics for Bohemian Rhapsody (simplified)."""
    return """[ar:Queen]
[ti:Bohemian Rhapsody]
[al:A Night at the Opera]
[length:05:54]

[00:00.00]Is this the real life?
[00:04.00]Is this just fantasy?
[00:08.00]Caught in a landslide
[00:11.00]No escape from reality
[00:15.00]Open your eyes
[00:19.00]Look up to the skies and see
[00:25.00]I'm just a poor boy
[00:27.00]I need no sympathy
[05:50.00]Nothing really matters
[05:54.00]"""


@pytest.fixture
def plain_yesterday():
    """Plain (unsynced) lyrics for Yesterday."""
    return """Yesterday
All my troubles seemed so far away

Now it looks as though they're here to stay
Oh, I believe in yesterday
"""


# =============================================================================
# LRCLIB Fixtures
# =============================================================================


@pytest.fixture
def lrclib_payload_synced():
    """LRCLIB /get response with both synced and plain lyrics."""
    return {
        "id": 3396226,
        "trackName": "Bohemian Rhapsody",
        "artistName": "Queen",
        "albumName": "A Night at the Opera",
        "duration": 354.0,
        "instrumental": False,
        "plainLyrics": "Is this the real life?\nIs this just fantasy?",
        "syncedLyrics": "[00:00.50]Is this the real life?\n[00:04.12]Is this just fantasy?",
    }


@pytest.fixture
def lrclib_payload_plain():
    """LRCLIB /get response with plain lyrics only."""
    return {
        "id": 12,
        "trackName": "Yesterday",
        "artistName": "The Beatles",
        "albumName": "Help!",
        "duration": 125.0,
        "instrumental": False,
        "plainLyrics": "Yesterday\nAll my troubles seemed so far away",
        "syncedLyrics": None,
    }


@pytest.fixture
def make_response():
    """Build a mock requests.Response."""

    def _make(status_code: int = 200, payload=None, json_error: Optional[Exception] = None):
        response = Mock()
        response.status_code = status_code
        if json_error is not None:
            response.json.side_effect = json_error
        else:
            response.json.return_value = payload
        return response

    return _make


@pytest.fixture
def mock_session(make_response):
    """requests.Session stand-in whose get() returns a 200 with an empty body."""
    session = Mock()
    session.headers = {}
    session.get.return_value = make_response(200, {})
    return session


# =============================================================================
# Track / Lyrics Fixtures
# =============================================================================


@pytest.fixture
def track_queen():
    return Track(
        id="track-queen",
        title="Bohemian Rhapsody",
        artist="Queen",
        album="A Night at the Opera",
        duration=354.0,
    )


@pytest.fixture
def track_beatles():
    return Track(id="track-beatles", title="Yesterday", artist="The Beatles", duration=125.0)


def build_lyrics(
    track_id: str = "1",
    starts: Optional[List[float]] = None,
    is_synced: bool = True,
    source: LyricsSource = LyricsSource.LRCLIB,
) -> Lyrics:
    """Chained lines starting at ``starts`` (last one open-ended)."""
    starts = starts if starts is not None else [0.0, 5.0, 10.0, 15.0, 20.0]
    lines = []
    for i, start in enumerate(starts):
        end = starts[i + 1] if i + 1 < len(starts) else None
        lines.append(LyricsLine(start_time=start, end_time=end, text=f"line {i}"))
    return Lyrics(
        track_id=track_id,
        track_title="Title",
        artist_name="Artist",
        lines=tuple(lines),
        is_synced=is_synced,
        source=source,
    )


@pytest.fixture
def synced_lyrics():
    return build_lyrics()


# =============================================================================
# Fake Providers
# =============================================================================


class FakeProvider(LyricsProvider):
    """Synchronous provider returning canned lyrics per track title."""

    def __init__(
        self,
        results: Optional[Dict[str, object]] = None,
        *,
        priority: int = 0,
        source: LyricsSource = LyricsSource.LOCAL,
        available: bool = True,
    ):
        self.results = results or {}
        self.priority = priority
        self.source = source
        self.available = available
        self.queries: List[LyricsSearchQuery] = []

    def fetch_lyrics(self, query: LyricsSearchQuery) -> Lyrics:
        self.queries.append(query)
        result = self.results.get(query.title, NotFoundError())
        if isinstance(result, Exception):
            raise result
        return result

    def is_available(self) -> bool:
        return self.available


class GatedProvider(LyricsProvider):
    """Async provider whose responses are released manually per title."""

    source = LyricsSource.LOCAL
    priority = 0

    def __init__(self, results: Dict[str, Lyrics]):
        self.results = results
        self.gates: Dict[str, asyncio.Event] = {}
        self.started: List[str] = []

    def gate(self, title: str) -> asyncio.Event:
        if title not in self.gates:
            self.gates[title] = asyncio.Event()
        return self.gates[title]

    async def fetch_lyrics(self, query: LyricsSearchQuery) -> Lyrics:
        self.started.append(query.title)
        await self.gate(query.title).wait()
        result = self.results.get(query.title)
        if result is None:
            raise NotFoundError()
        return result


@pytest.fixture
def fake_provider_factory() -> Callable[..., FakeProvider]:
    return FakeProvider


@pytest.fixture
def gated_provider_factory() -> Callable[..., GatedProvider]:
    return GatedProvider


@pytest.fixture
def lyrics_factory() -> Callable[..., Lyrics]:
    return build_lyrics
