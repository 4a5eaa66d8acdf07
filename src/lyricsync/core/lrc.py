"""LRC parsing into LyricsLine sequences.

This module handles:
- Building time-ordered, end-time-chained lines from synced LRC text
- Building untimed lines from plain lyrics text

Only the first timestamp tag of a line is honoured. Lines carrying several
tags (``[00:01.00][00:30.00]chorus``) keep the remaining tags in their text.
"""

import re
from typing import List, Tuple

from .models import LyricsLine

# ----------------------
# LRC timestamp regex
# ----------------------
_LRC_TS_RE = re.compile(
    r"""
    \[                      # opening bracket
    (?P<min>\d{2})          # minutes
    :
    (?P<sec>\d{2})          # seconds
    \.
    (?P<frac>\d{2,3})       # centiseconds or milliseconds
    \]                      # closing bracket
    """,
    re.VERBOSE,
)


def _timestamp_from_match(match: "re.Match[str]") -> float:
    minutes = int(match.group("min"))
    seconds = int(match.group("sec"))
    frac = match.group("frac")
    millis = int(frac) * 10 if len(frac) == 2 else int(frac)
    return minutes * 60 + seconds + millis / 1000


def _collect_timed_lines(text: str) -> List[Tuple[float, str]]:
    timed: List[Tuple[float, str]] = []
    for raw_line in text.splitlines():
        line = raw_line.strip()
        match = _LRC_TS_RE.match(line)
        if not match:
            continue

        line_text = line[match.end() :].strip()
        if not line_text:
            continue

        timed.append((_timestamp_from_match(match), line_text))
    return timed


def parse_synced(text: str) -> List[LyricsLine]:
    """Parse LRC text into lines sorted by start time.

    Each line's ``end_time`` is the next line's ``start_time``; the last
    line is left open-ended.
    """
    if not text:
        return []

    # sorted() is stable, so equal timestamps keep their input order
    timed = sorted(_collect_timed_lines(text), key=lambda item: item[0])

    lines: List[LyricsLine] = []
    for i, (start_time, line_text) in enumerate(timed):
        end_time = timed[i + 1][0] if i + 1 < len(timed) else None
        lines.append(LyricsLine(start_time=start_time, end_time=end_time, text=line_text))
    return lines


def parse_plain(text: str) -> List[LyricsLine]:
    """Turn plain lyrics into display-only lines.

    Start times are the 0-based line index and carry no real timing, so the
    resulting lyrics must be flagged as unsynced.
    """
    if not text:
        return []

    non_blank = [line for line in text.splitlines() if line.strip()]
    return [
        LyricsLine(start_time=float(index), text=line)
        for index, line in enumerate(non_blank)
    ]
