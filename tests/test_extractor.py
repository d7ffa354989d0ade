"""Tests for probing scoring responses."""
from read_feedback.speechace.extractor import decode_record, extract_overall, extract_word_scores


def test_text_score_nested_under_speechace_score():
    raw = {"text_score": {"speechace_score": {"word_score_list": [{"word": "hi", "quality_score": 88}]}}}
    records = extract_word_scores(raw)
    assert [r.word for r in records] == ["hi"]
    assert records[0].quality_score == 88


def test_path_order_prefers_text_score():
    raw = {
        "text_score": {"word_score_list": [{"word": "reading"}]},
        "speech_score": {"word_score_list": [{"word": "speech"}]},
        "word_score_list": [{"word": "top"}],
    }
    assert [r.word for r in extract_word_scores(raw)] == ["reading"]


def test_speech_score_and_top_level_shapes():
    assert extract_word_scores({"speech_score": {"word_score_list": [{"word": "a"}]}})[0].word == "a"
    assert extract_word_scores({"word_score_list": [{"word": "b"}]})[0].word == "b"


def test_non_list_candidate_is_skipped():
    raw = {"text_score": {"word_score_list": "oops"}, "word_score_list": [{"word": "ok"}]}
    assert [r.word for r in extract_word_scores(raw)] == ["ok"]


def test_unrecognised_shapes_yield_empty_list():
    assert extract_word_scores(None) == []
    assert extract_word_scores("not json") == []
    assert extract_word_scores({"raw": "<html>"}) == []
    assert extract_word_scores({"text_score": None}) == []
    assert extract_word_scores([{"word": "x"}]) == []


def test_non_mapping_entries_are_dropped():
    records = extract_word_scores({"word_score_list": [{"word": "a"}, 3, None, {"text": "b"}]})
    assert [r.word for r in records] == ["a", "b"]


def test_decode_record_fields():
    record = decode_record({
        "word": "There",
        "quality_score": 72.5,
        "start_time": "1500",
        "end": 2300,
        "phone_score_list": [
            {"phone": "dh", "quality_score": 98, "extent": [10, 20]},
            {"symbol": "eh", "quality": 40, "sound_most_like": "ah", "extent": [20, "x"]},
            "junk",
        ],
    })
    assert record.word == "There"
    assert record.quality_score == 72.5
    assert record.start == "1500"
    assert record.end == 2300
    assert [p.phone for p in record.phones] == ["dh", "eh"]
    assert record.phones[0].extent == (10, 20)
    assert record.phones[1].extent == (20, "x")
    assert record.phones[1].quality == 40
    assert record.phones[1].sound_most_like == "ah"


def test_quality_fallback_fields_and_non_numeric_quality():
    assert decode_record({"word": "a", "score": 51}).quality_score == 51
    assert decode_record({"word": "a", "quality_score": "90"}).quality_score is None
    assert decode_record({"word": "a", "quality_score": True}).quality_score is None


def test_extract_overall():
    assert extract_overall({"text_score": {"speechace_score": {"overall": 81.2}}}) == 81.2
    assert extract_overall({"speech_score": {"speechace_score": {"overall": 60}}}) == 60
    assert extract_overall({"text_score": {"speechace_score": {"overall": None}}, "overall": 55}) == 55
    assert extract_overall({}) is None


def test_phone_quality_accepts_numeric_strings():
    record = decode_record({"word": "a", "phone_score_list": [
        {"phone": "ah", "quality_score": "87"},
        {"phone": "b", "quality_score": " 61.5 "},
        {"phone": "c", "quality_score": "n/a"},
    ]})
    assert [p.quality for p in record.phones] == [87.0, 61.5, None]


def test_phone_extent_kept_when_only_used_bound_is_numeric():
    record = decode_record({"word": "cat", "phone_score_list": [
        {"phone": "k", "extent": [50, None]},
        {"phone": "ae", "extent": ["?", 90]},
        {"phone": "t", "extent": [90]},
    ]})
    assert [p.extent for p in record.phones] == [(50, None), ("?", 90), None]
