"""Derive a word's interval in the recording from its score record.

Phone extents are preferred (10 ms ticks, fine grained). Item-level
start/end fields are a fallback whose unit varies between service versions.
A word with neither is untimed; there is no approximate fallback.
"""
from __future__ import annotations

import math
from typing import Any, Optional

from ..models.score_record import ScoreRecord
from ..models.word_display import TimeInterval

# One extent tick is 10 ms
TICK_SEC = 0.01

# Floor on word width so rounded extents never produce empty segments
MIN_WORD_SEC = 0.02

# Item-level values above this are milliseconds, otherwise seconds
MS_THRESHOLD = 1000


def _tick(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value) if math.isfinite(value) else None


def timing_from_phone_extents(record: ScoreRecord) -> Optional[TimeInterval]:
    """Interval spanning the first phone's start to the last phone's end."""
    if not record.phones:
        return None

    first = record.phones[0].extent
    last = record.phones[-1].extent
    if first is None or last is None:
        return None

    start_ticks = _tick(first[0])
    end_ticks = _tick(last[1])
    if start_ticks is None or end_ticks is None:
        return None

    start_sec = max(0.0, start_ticks * TICK_SEC)
    end_sec = max(start_sec + MIN_WORD_SEC, end_ticks * TICK_SEC)
    return TimeInterval(start_sec, end_sec)


def to_seconds(value: Any) -> Optional[float]:
    """Convert an item-level timing field to seconds.

    Accepts numbers and numeric strings. Values above 1000 are taken as
    milliseconds. Returns None for anything missing, unparsable or non-finite.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            n = float(value.strip())
        except ValueError:
            return None
    elif isinstance(value, (int, float)):
        n = float(value)
    else:
        return None

    if not math.isfinite(n):
        return None
    if n > MS_THRESHOLD:
        return n / 1000.0
    return n


def timing_from_item(record: ScoreRecord) -> Optional[TimeInterval]:
    """Interval from the record's own start/end fields."""
    start = to_seconds(record.start)
    end = to_seconds(record.end)
    if start is None or end is None:
        return None

    start = max(0.0, start)
    if end <= start:
        return None
    return TimeInterval(start, end)


def resolve_timing(record: Optional[ScoreRecord]) -> Optional[TimeInterval]:
    """Return the interval of ``record`` in the recording, or None if untimed."""
    if record is None:
        return None
    return timing_from_phone_extents(record) or timing_from_item(record)
