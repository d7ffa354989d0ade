"""Display-ready units produced by one alignment pass."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .score_record import PhoneRecord, ScoreRecord

TOKEN_SPACE = "space"
TOKEN_PUNCT = "punct"
TOKEN_WORD = "word"


@dataclass(frozen=True)
class TimeInterval:
    """A span of the source recording, in seconds (0 <= start_sec < end_sec)."""
    start_sec: float
    end_sec: float

    @property
    def duration(self) -> float:
        return self.end_sec - self.start_sec

    def to_dict(self) -> Dict[str, float]:
        return {"start_sec": self.start_sec, "end_sec": self.end_sec}


@dataclass(frozen=True)
class WordDisplay:
    """A reference-text word with the score record attached to it.

    Attributes:
        index: Position of the word among the word tokens of the text
        word: Word exactly as written in the reference text
        quality: 0-100 quality copied from the attached record (or None)
        phones: Phone scores copied from the attached record
        timing: Interval in the recording (or None if the word is untimed)
        record: The attached score record (or None if nothing was attached)
    """
    index: int
    word: str
    quality: Optional[float] = None
    phones: Tuple[PhoneRecord, ...] = ()
    timing: Optional[TimeInterval] = None
    record: Optional[ScoreRecord] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "word": self.word,
            "quality": self.quality,
            "phones": [p.to_dict() for p in self.phones],
            "timing": self.timing.to_dict() if self.timing is not None else None,
        }


@dataclass(frozen=True)
class Token:
    """One piece of the reference text: a space run, punctuation run or word.

    Only word tokens ever carry an ``attach``.
    """
    kind: str  # "space" | "punct" | "word"
    text: str
    attach: Optional[WordDisplay] = None

    @property
    def is_word(self) -> bool:
        return self.kind == TOKEN_WORD

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"kind": self.kind, "text": self.text}
        if self.is_word:
            out["attach"] = self.attach.index if self.attach is not None else None
        return out
