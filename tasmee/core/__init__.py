"""
Core modules for Tasmee library.

This package contains the core business logic for:
- Arabic text normalization
- Similarity scoring
- Sequential prefix matching of recitation input
- Reveal state tracking for the active verse
"""

from tasmee.core.arabic import normalize_arabic, tokenize
from tasmee.core.matcher import edit_distance, similarity
from tasmee.core.sequential import DEFAULT_ACCEPT_THRESHOLD, match_sequence, match_text
from tasmee.core.tracker import RevealStateTracker

__all__ = [
    # Arabic
    "normalize_arabic",
    "tokenize",
    # Matcher
    "edit_distance",
    "similarity",
    # Sequential
    "DEFAULT_ACCEPT_THRESHOLD",
    "match_sequence",
    "match_text",
    # Tracker
    "RevealStateTracker",
]
