"""Environment driven settings.

Values are read once at import time. Anything a caller needs to vary per
request (dialect, lookahead) is also accepted as a function argument.
"""
from __future__ import annotations

import os
from typing import Optional

from .errors import ConfigurationError

# Scoring service (SpeechAce "text" endpoint: scripted reading)
SPEECHACE_KEY = os.getenv("SPEECHACE_KEY", "")
SPEECHACE_TEXT_ENDPOINT = os.getenv("SPEECHACE_TEXT_ENDPOINT", "")
SPEECHACE_TIMEOUT = float(os.getenv("SPEECHACE_TIMEOUT", "120"))

DIALECTS = ("en-us", "en-gb")
DEFAULT_DIALECT = os.getenv("SPEECHACE_DIALECT", "en-us")

# Alignment
LOOKAHEAD = int(os.getenv("READ_FEEDBACK_LOOKAHEAD", "4"))

# Logging
LOG_LEVEL = os.getenv("READ_FEEDBACK_LOG_LEVEL", "INFO")


def is_dialect(value: Optional[str]) -> bool:
    return isinstance(value, str) and value in DIALECTS


def resolve_dialect(value: Optional[str]) -> str:
    """Return ``value`` if it is a supported dialect, else the default."""
    if is_dialect(value):
        return value  # type: ignore[return-value]
    return DEFAULT_DIALECT if is_dialect(DEFAULT_DIALECT) else DIALECTS[0]


def require(name: str) -> str:
    """Return a non-empty setting from this module or raise ConfigurationError."""
    value = globals().get(name)
    if not value:
        raise ConfigurationError(f"Missing setting: {name}")
    return value
