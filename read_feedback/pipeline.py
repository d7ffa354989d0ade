"""Scoring response + reference text -> display-ready reading feedback."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from . import config
from .alignment.aligner import align_words
from .alignment.tokenizer import attach_words, tokenize_text, word_tokens
from .feedback import format_phones_for_tooltip, quality_band, weakest_words
from .models.word_display import Token, WordDisplay
from .speechace.extractor import extract_overall, extract_word_scores

logger = logging.getLogger(__name__)


@dataclass
class ReadingFeedback:
    """Everything the rendering layer needs for one scoring result.

    Attributes:
        tokens: Reference text tokens, word tokens attached to their displays
        words: One WordDisplay per word token
        overall: Overall 0-100 score reported by the service (or None)
        record_count: Number of score records found in the response
    """
    tokens: List[Token] = field(default_factory=list)
    words: List[WordDisplay] = field(default_factory=list)
    overall: Optional[float] = None
    record_count: int = 0

    @property
    def has_scores(self) -> bool:
        return self.record_count > 0

    def weakest(self, n: int = 8) -> List[WordDisplay]:
        return weakest_words(self.words, n)

    def to_dict(self) -> Dict[str, Any]:
        words = []
        for w in self.words:
            d = w.to_dict()
            d["band"] = quality_band(w.quality)
            d["tooltip"] = format_phones_for_tooltip(w)
            words.append(d)
        return {
            "overall": self.overall,
            "has_scores": self.has_scores,
            "tokens": [t.to_dict() for t in self.tokens],
            "words": words,
            "weakest": [{"word": w.word, "index": w.index, "quality": w.quality} for w in self.weakest()],
        }


def build_reading_feedback(
    reference_text: str,
    raw_response: Any,
    lookahead: Optional[int] = None,
) -> ReadingFeedback:
    """Align a scoring response to the reference text.

    Pipeline flow:
    1. Extract the per-word score list from the response
    2. Tokenize the reference text (spaces, punctuation, words)
    3. Align word tokens to score records (timing resolved per record)
    4. Attach the resulting displays to the word tokens

    Args:
        reference_text: Text exactly as the reader was shown it
        raw_response: Decoded scoring-service response (any shape)
        lookahead: Aligner window (default: READ_FEEDBACK_LOOKAHEAD)

    Returns:
        ReadingFeedback; ``has_scores`` is False when the response carried no word list
    """
    records = extract_word_scores(raw_response)
    tokens = tokenize_text(reference_text or "")
    words = align_words(
        word_tokens(tokens),
        records,
        lookahead=lookahead if lookahead is not None else config.LOOKAHEAD,
    )
    if not records:
        logger.info("Scoring response has no word scores; %d words left unscored", len(words))

    return ReadingFeedback(
        tokens=attach_words(tokens, words),
        words=words,
        overall=extract_overall(raw_response),
        record_count=len(records),
    )
