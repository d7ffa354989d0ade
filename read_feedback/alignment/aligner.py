"""Bounded-lookahead alignment of reference words to scored words.

The service's word list normally follows the reference text, but may have
missing, merged or extra entries. A forward cursor with a small lookahead
window handles that near-ordered case in O(n*k) without a full edit-distance
alignment. It is a best-effort heuristic: when the service drops two or more
consecutive words, a record can be attached to the wrong word.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Union

from ..models.score_record import ScoreRecord
from ..models.word_display import Token, WordDisplay
from ..timing.resolver import resolve_timing
from .normalizer import normalize_word

logger = logging.getLogger(__name__)

DEFAULT_LOOKAHEAD = 4


class WordScoreAligner:
    """Walks a score list with a monotonic cursor, one reference word at a time.

    Args:
        records: Score records in service-reported order
        lookahead: How many records from the cursor to scan for an exact match
    """

    def __init__(self, records: Sequence[ScoreRecord], lookahead: int = DEFAULT_LOOKAHEAD):
        if lookahead < 1:
            raise ValueError(f"lookahead must be >= 1, got {lookahead}")
        self.records = records
        self.lookahead = lookahead
        self._cursor = 0
        self._normalized = [normalize_word(r.word) for r in records]

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def exhausted(self) -> bool:
        return self._cursor >= len(self.records)

    def match(self, word: str) -> Optional[ScoreRecord]:
        """Pick the record for the next reference word and advance the cursor.

        The first exact normalized match within the window wins. Without a
        match the record under the cursor is taken as a best-effort guess.
        """
        j = self._cursor
        if j >= len(self.records):
            return None

        target = normalize_word(word)
        window_end = min(len(self.records), j + self.lookahead)
        picked = j
        if target:
            for k in range(j, window_end):
                if self._normalized[k] == target:
                    picked = k
                    break
            else:
                logger.debug(
                    "No match for %r in window [%d, %d); taking %r",
                    word, j, window_end, self.records[j].word,
                )

        self._cursor = picked + 1
        return self.records[picked]


def build_display(index: int, word: str, record: Optional[ScoreRecord]) -> WordDisplay:
    """Display for one reference word given its attached record (or None)."""
    if record is None:
        return WordDisplay(index=index, word=word)
    return WordDisplay(
        index=index,
        word=word,
        quality=record.quality_score,
        phones=record.phones,
        timing=resolve_timing(record),
        record=record,
    )


def align_words(
    words: Sequence[Union[Token, str]],
    records: Sequence[ScoreRecord],
    lookahead: int = DEFAULT_LOOKAHEAD,
) -> List[WordDisplay]:
    """Attach a score record to each reference word.

    Args:
        words: Word tokens (or plain word strings) in text order
        records: Score records in service order
        lookahead: Lookahead window size

    Returns:
        Exactly one WordDisplay per input word, in the same order
    """
    aligner = WordScoreAligner(records, lookahead=lookahead)
    displays: List[WordDisplay] = []
    for i, w in enumerate(words):
        text = w.text if isinstance(w, Token) else w
        displays.append(build_display(i, text, aligner.match(text)))

    if len(records) > aligner.cursor:
        logger.debug("%d score records left unattached", len(records) - aligner.cursor)
    return displays
