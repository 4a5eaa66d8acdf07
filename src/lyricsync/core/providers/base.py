"""Base class for lyrics providers."""

from abc import ABC, abstractmethod
from typing import Iterable, List

from ..models import Lyrics, LyricsSearchQuery, LyricsSource


class LyricsProvider(ABC):
    """Fetches lyrics for a search query from one external source.

    Subclasses set ``source`` and ``priority``; providers with a higher
    priority are tried first.
    """

    source: LyricsSource = LyricsSource.UNKNOWN
    priority: int = 0

    @property
    def name(self) -> str:
        return self.source.value

    @abstractmethod
    def fetch_lyrics(self, query: LyricsSearchQuery) -> Lyrics:
        """
        Fetch lyrics matching ``query``.

        Raises:
            LyricsError: One of NotFoundError, RateLimitedError, NetworkError,
                ParseError or InvalidResponseError.
        """

    def is_available(self) -> bool:
        """Whether prerequisites (credentials, services) are in place."""
        return True

    def __repr__(self) -> str:
        return f"{type(self).__name__}(source={self.name!r}, priority={self.priority})"


def sort_providers(providers: Iterable[LyricsProvider]) -> List[LyricsProvider]:
    """Order providers by descending priority, keeping ties in given order."""
    return sorted(providers, key=lambda provider: provider.priority, reverse=True)
