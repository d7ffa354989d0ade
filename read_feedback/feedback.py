"""Presentation helpers for aligned words: bands, tooltips, weakest words."""
from __future__ import annotations

import math
from typing import List, Optional, Sequence

from .models.word_display import WordDisplay

# Quality thresholds (0-100): >= GOOD is good, >= WARN is warn, else bad
GOOD_THRESHOLD = 85
WARN_THRESHOLD = 70


def _finite(q: Optional[float]) -> bool:
    return isinstance(q, (int, float)) and not isinstance(q, bool) and math.isfinite(q)


def quality_band(quality: Optional[float]) -> str:
    """Map a 0-100 quality to "good", "warn", "bad", or "none" when missing."""
    if not _finite(quality):
        return "none"
    if quality >= GOOD_THRESHOLD:
        return "good"
    if quality >= WARN_THRESHOLD:
        return "warn"
    return "bad"


def format_phones_for_tooltip(word: WordDisplay, limit: int = 10) -> str:
    """Phone detail for a word, e.g. ``dh(98)  ah(61)→eh``."""
    parts: List[str] = []
    for p in word.phones[:limit]:
        q = "" if not _finite(p.quality) else f"({round(p.quality)})"
        like = f"→{p.sound_most_like}" if p.sound_most_like else ""
        parts.append(f"{p.phone}{q}{like}")
    return "  ".join(parts)


def weakest_words(words: Sequence[WordDisplay], n: int = 8) -> List[WordDisplay]:
    """The ``n`` lowest-quality words, lowest first; words without a score are skipped."""
    scored = [w for w in words if _finite(w.quality)]
    return sorted(scored, key=lambda w: w.quality)[:n]
