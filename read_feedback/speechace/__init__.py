"""Scoring-service integration: response probing and the HTTP client."""
from .client import SpeechAceClient
from .extractor import extract_overall, extract_word_scores

__all__ = ["SpeechAceClient", "extract_overall", "extract_word_scores"]
