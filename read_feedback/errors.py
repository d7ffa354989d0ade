"""Exceptions raised by read_feedback.

Parsing and alignment never raise: missing or unrecognised scoring data
degrades to empty lists and ``None``. Only the conditions below surface.
"""
from __future__ import annotations

from typing import Optional


class ReadFeedbackError(Exception):
    """Base class for all read_feedback errors."""


class NoTimingError(ReadFeedbackError):
    """Playback was requested for a word that has no timing in the recording."""

    def __init__(self, word: str, index: Optional[int] = None):
        self.word = word
        self.index = index
        super().__init__(
            f"No timing available for word {word!r}; cannot play it "
            "(the scoring service did not return phone extents or start/end times)"
        )


class ScoringServiceError(ReadFeedbackError):
    """The external scoring service could not be reached or failed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class ConfigurationError(ReadFeedbackError):
    """A required setting is missing."""
