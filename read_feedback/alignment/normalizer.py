"""Word normalization for matching reference words to scored words."""
from __future__ import annotations

import re

# Anything that is not a letter or digit (underscore included)
_NON_ALNUM = re.compile(r"[\W_]+")


def normalize_word(token: str) -> str:
    """Normalize a word for comparison.

    Lowercases and strips every non-alphanumeric character, apostrophes
    included, so "Don't" and "dont" compare equal.

    Args:
        token: Word text from the reference or from the scoring service

    Returns:
        Normalized word (may be empty)
    """
    return _NON_ALNUM.sub("", (token or "").lower())
