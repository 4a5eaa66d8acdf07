"""Lyrics providers."""

from typing import List

from .base import LyricsProvider, sort_providers
from .lrclib import LRCLibProvider

__all__ = [
    "LyricsProvider",
    "LRCLibProvider",
    "default_providers",
    "sort_providers",
]


def default_providers() -> List[LyricsProvider]:
    """Providers shipped with the package, in priority order."""
    return sort_providers([LRCLibProvider()])
