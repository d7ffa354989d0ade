"""Data model for per-word records returned by the scoring service."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple


@dataclass(frozen=True)
class PhoneRecord:
    """One phoneme-level score inside a word.

    Attributes:
        phone: Phone label as reported by the service (e.g. "dh")
        quality: 0-100 quality score (or None if not reported)
        sound_most_like: What the speaker's sound most resembled (or None)
        extent: (start, end) in 10 ms ticks, values as the service sent them (or None)
    """
    phone: str
    quality: Optional[float] = None
    sound_most_like: Optional[str] = None
    extent: Optional[Tuple[Any, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "phone": self.phone,
            "quality": self.quality,
            "sound_most_like": self.sound_most_like,
            "extent": list(self.extent) if self.extent is not None else None,
        }


@dataclass(frozen=True)
class ScoreRecord:
    """One scoring-service entry for a spoken word.

    Attributes:
        word: Word text as the service reported it
        quality_score: 0-100 word quality (or None)
        phones: Phone-level scores, in spoken order (possibly empty)
        start: Raw item-level start field (number, numeric string or None)
        end: Raw item-level end field (number, numeric string or None)
        raw: The untouched service entry
    """
    word: str
    quality_score: Optional[float] = None
    phones: Tuple[PhoneRecord, ...] = ()
    start: Any = None
    end: Any = None
    raw: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)
