"""Data models shared by the extractor, aligner and playback layers."""
from .score_record import PhoneRecord, ScoreRecord
from .word_display import TimeInterval, Token, WordDisplay

__all__ = ["PhoneRecord", "ScoreRecord", "TimeInterval", "Token", "WordDisplay"]
