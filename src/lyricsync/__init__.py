"""Synchronized lyrics for the track playing on a host media player."""

__version__ = "0.1.0"
