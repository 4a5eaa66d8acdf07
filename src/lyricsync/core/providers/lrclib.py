"""LRCLIB lyrics provider.

Looks up a track by artist/title (plus album and duration when known) on the
public LRCLIB API and prefers synced lyrics over plain ones.
"""

from typing import Any, Dict, Optional

import requests  # type: ignore[import-untyped]

from ... import config
from ...exceptions import (
    InvalidResponseError,
    NetworkError,
    NotFoundError,
    ParseError,
    RateLimitedError,
)
from ...utils.logging import get_logger
from ..lrc import parse_plain, parse_synced
from ..models import Lyrics, LyricsSearchQuery, LyricsSource
from .base import LyricsProvider

logger = get_logger(__name__)


class LRCLibProvider(LyricsProvider):
    """Provider backed by https://lrclib.net."""

    source = LyricsSource.LRCLIB
    priority = config.LRCLIB_PRIORITY

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or config.LRCLIB_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else config.HTTP_TIMEOUT
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": user_agent or config.USER_AGENT})

    def build_params(self, query: LyricsSearchQuery) -> Dict[str, Any]:
        """Query-string parameters for ``GET /get``."""
        params: Dict[str, Any] = {
            "artist_name": query.artist,
            "track_name": query.title,
        }
        if query.album:
            params["album_name"] = query.album
        if query.duration and query.duration > 0:
            params["duration"] = int(query.duration)
        return params

    def fetch_lyrics(self, query: LyricsSearchQuery) -> Lyrics:
        url = f"{self.base_url}/get"
        params = self.build_params(query)
        logger.info(f"Fetching lyrics from LRCLIB: {query.artist} - {query.title}")

        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise NetworkError(e) from e

        status = response.status_code
        if status == 200:
            return self._parse_response(response, query)
        if status == 404:
            raise NotFoundError()
        if status == 429:
            raise RateLimitedError()

        logger.error(f"LRCLIB returned status code: {status}")
        raise InvalidResponseError(f"Unexpected status code {status} from LRCLIB")

    def _parse_response(
        self, response: requests.Response, query: LyricsSearchQuery
    ) -> Lyrics:
        try:
            data = response.json()
        except ValueError as e:
            raise ParseError(f"invalid JSON from LRCLIB: {e}") from e

        if not isinstance(data, dict):
            raise ParseError("expected a JSON object from LRCLIB")

        synced = data.get("syncedLyrics") or None
        plain = data.get("plainLyrics") or None

        if synced is None and plain is None:
            if data.get("instrumental"):
                logger.debug("LRCLIB marks track as instrumental")
            raise NotFoundError()

        lines = parse_synced(synced) if synced else []
        is_synced = bool(lines)
        if not is_synced:
            if synced:
                logger.debug("Synced lyrics had no usable timestamps, using plain text")
            lines = parse_plain(plain) if plain else []

        if not lines:
            raise NotFoundError()

        record_id = data.get("id")
        return Lyrics(
            track_id=str(record_id) if record_id is not None else "",
            track_title=data.get("trackName") or query.title,
            artist_name=data.get("artistName") or query.artist,
            lines=tuple(lines),
            is_synced=is_synced,
            source=self.source,
        )
