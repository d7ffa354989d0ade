"""End-to-end tests: scoring response + reference text -> reading feedback."""
import pytest

from conftest import speechace_item
from read_feedback.feedback import format_phones_for_tooltip, quality_band, weakest_words
from read_feedback.models.score_record import PhoneRecord
from read_feedback.models.word_display import WordDisplay
from read_feedback.pipeline import build_reading_feedback


def test_the_cat_sat(cat_response):
    feedback = build_reading_feedback("The cat sat.", cat_response)

    assert [w.word for w in feedback.words] == ["The", "cat", "sat"]
    assert [w.quality for w in feedback.words] == [90, 40, 95]
    timings = [(w.timing.start_sec, w.timing.end_sec) for w in feedback.words]
    assert timings == [pytest.approx((0, 0.5)), pytest.approx((0.5, 1.5)), pytest.approx((1.5, 2.2))]
    assert feedback.overall == 75
    assert feedback.has_scores

    assert "".join(t.text for t in feedback.tokens) == "The cat sat."
    attached = [t.attach for t in feedback.tokens if t.is_word]
    assert attached == feedback.words


def test_no_scoring_data_leaves_words_unscored():
    feedback = build_reading_feedback("Hello there, world", {"raw": "gateway timeout"})
    assert not feedback.has_scores
    assert len(feedback.words) == 3
    assert all(w.quality is None and w.timing is None for w in feedback.words)
    assert feedback.overall is None


def test_empty_text():
    feedback = build_reading_feedback("", {"word_score_list": [speechace_item("a", 10)]})
    assert feedback.tokens == []
    assert feedback.words == []


def test_to_dict_is_json_ready(cat_response):
    data = build_reading_feedback("The cat sat.", cat_response).to_dict()

    assert data["overall"] == 75
    assert [t["kind"] for t in data["tokens"]] == ["word", "space", "word", "space", "word", "punct"]
    assert [t.get("attach") for t in data["tokens"] if t["kind"] == "word"] == [0, 1, 2]
    cat = data["words"][1]
    assert cat["band"] == "bad"
    assert cat["timing"] == {"start_sec": pytest.approx(0.5), "end_sec": pytest.approx(1.5)}
    assert cat["tooltip"].startswith("p0(40)")
    assert data["weakest"][0] == {"word": "cat", "index": 1, "quality": 40}


@pytest.mark.parametrize("quality,band", [
    (None, "none"), (float("nan"), "none"), (85, "good"), (99.5, "good"),
    (70, "warn"), (84.9, "warn"), (69.9, "bad"), (0, "bad"),
])
def test_quality_band(quality, band):
    assert quality_band(quality) == band


def test_format_phones_for_tooltip():
    word = WordDisplay(index=0, word="the", phones=(
        PhoneRecord("dh", 97.6),
        PhoneRecord("ah", 61.2, sound_most_like="eh"),
        PhoneRecord("x", None),
    ))
    assert format_phones_for_tooltip(word) == "dh(98)  ah(61)→eh  x"
    assert format_phones_for_tooltip(WordDisplay(index=0, word="a")) == ""


def test_weakest_words():
    words = [
        WordDisplay(index=0, word="a", quality=80),
        WordDisplay(index=1, word="b", quality=None),
        WordDisplay(index=2, word="c", quality=30),
        WordDisplay(index=3, word="d", quality=55),
    ]
    assert [w.word for w in weakest_words(words, n=2)] == ["c", "d"]
