"""Search a loosely-shaped scoring response for its per-word score list.

The response shape depends on the scoring mode (scripted reading puts
results under ``text_score``, free speech under ``speech_score``) and on
the service version. Each known shape is a path; the first path that
resolves to the expected type wins.
"""
from __future__ import annotations

import logging
import math
from typing import Any, Callable, List, Mapping, Optional, Sequence, Tuple

from ..models.score_record import PhoneRecord, ScoreRecord

logger = logging.getLogger(__name__)

WORD_LIST_PATHS: Tuple[Tuple[str, ...], ...] = (
    ("text_score", "speechace_score", "word_score_list"),
    ("text_score", "word_score_list"),
    ("speech_score", "speechace_score", "word_score_list"),
    ("speech_score", "word_score_list"),
    ("speechace_score", "word_score_list"),
    ("word_score_list",),
)

OVERALL_PATHS: Tuple[Tuple[str, ...], ...] = (
    ("text_score", "speechace_score", "overall"),
    ("text_score", "overall"),
    ("speech_score", "speechace_score", "overall"),
    ("speechace_score", "overall"),
    ("overall",),
)


def _lookup(raw: Any, path: Sequence[str]) -> Any:
    """Follow ``path`` through nested mappings; None if any step is missing."""
    node = raw
    for key in path:
        if not isinstance(node, Mapping):
            return None
        node = node.get(key)
    return node


def _first_match(raw: Any, paths: Sequence[Sequence[str]], accept: Callable[[Any], bool]) -> Any:
    for path in paths:
        value = _lookup(raw, path)
        if accept(value):
            logger.debug("Scoring response matched %s", ".".join(path))
            return value
    return None


def _number(value: Any) -> Optional[float]:
    """Return a finite float for int/float values; bools and strings are not scores."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    value = float(value)
    return value if math.isfinite(value) else None


def _numeric(value: Any) -> Optional[float]:
    """Like ``_number`` but also accepts numeric strings ("87", " 61.5 ")."""
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    return _number(value)


def _first_number(item: Mapping[str, Any], keys: Sequence[str], parse=_number) -> Optional[float]:
    for key in keys:
        n = parse(item.get(key))
        if n is not None:
            return n
    return None


def _first_present(item: Mapping[str, Any], keys: Sequence[str]) -> Any:
    for key in keys:
        value = item.get(key)
        if value is not None:
            return value
    return None


def _extent(value: Any) -> Optional[Tuple[Any, Any]]:
    # Values are checked where they are used: a word's timing needs only the
    # first phone's start and the last phone's end.
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        return None
    return (value[0], value[1])


def _phone(item: Any) -> Optional[PhoneRecord]:
    if not isinstance(item, Mapping):
        return None
    label = item.get("phone") or item.get("symbol") or ""
    like = item.get("sound_most_like")
    return PhoneRecord(
        phone=str(label),
        quality=_first_number(item, ("quality_score", "quality"), parse=_numeric),
        sound_most_like=str(like) if like else None,
        extent=_extent(item.get("extent")),
    )


def decode_record(item: Any) -> Optional[ScoreRecord]:
    """Decode one ``word_score_list`` entry; None if it is not a mapping."""
    if not isinstance(item, Mapping):
        return None

    phones_raw = item.get("phone_score_list")
    phones: List[PhoneRecord] = []
    if isinstance(phones_raw, list):
        for p in phones_raw:
            phone = _phone(p)
            if phone is not None:
                phones.append(phone)

    word = item.get("word") or item.get("text") or ""
    return ScoreRecord(
        word=str(word),
        quality_score=_first_number(item, ("quality_score", "quality", "score")),
        phones=tuple(phones),
        start=_first_present(item, ("start_time", "start")),
        end=_first_present(item, ("end_time", "end")),
        raw=item,
    )


def extract_word_scores(raw: Any) -> List[ScoreRecord]:
    """Return the ordered per-word score list of a scoring response.

    Never raises. An empty list means "no scoring data available".

    Args:
        raw: Decoded JSON response of the scoring service (any shape)

    Returns:
        List of ScoreRecord, in the order the service reported them
    """
    items = _first_match(raw, WORD_LIST_PATHS, lambda v: isinstance(v, list))
    if items is None:
        logger.debug("No word_score_list found in scoring response")
        return []

    records: List[ScoreRecord] = []
    for item in items:
        record = decode_record(item)
        if record is None:
            logger.debug("Skipping non-object word score entry: %r", item)
            continue
        records.append(record)
    return records


def extract_overall(raw: Any) -> Optional[float]:
    """Return the overall 0-100 score of a scoring response, if present."""
    value = _first_match(raw, OVERALL_PATHS, lambda v: _number(v) is not None)
    return _number(value)
