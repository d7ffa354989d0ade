"""Align pronunciation scores to a reference text and play words back."""
from .alignment import align_words, tokenize_text
from .errors import ConfigurationError, NoTimingError, ReadFeedbackError, ScoringServiceError
from .models import PhoneRecord, ScoreRecord, TimeInterval, Token, WordDisplay
from .pipeline import ReadingFeedback, build_reading_feedback
from .playback import PlaybackScheduler
from .speechace import extract_word_scores
from .timing import resolve_timing

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "NoTimingError",
    "PhoneRecord",
    "PlaybackScheduler",
    "ReadFeedbackError",
    "ReadingFeedback",
    "ScoreRecord",
    "ScoringServiceError",
    "TimeInterval",
    "Token",
    "WordDisplay",
    "align_words",
    "build_reading_feedback",
    "extract_word_scores",
    "resolve_timing",
    "tokenize_text",
]
