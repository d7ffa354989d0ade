"""Alignment utilities for matching reference text to scored words."""
from .aligner import WordScoreAligner, align_words
from .normalizer import normalize_word
from .tokenizer import attach_words, tokenize_text, word_tokens

__all__ = [
    "WordScoreAligner",
    "align_words",
    "attach_words",
    "normalize_word",
    "tokenize_text",
    "word_tokens",
]
