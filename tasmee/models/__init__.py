"""
Pydantic data models for Tasmee library.

These models represent the core data structures used throughout the library:
- Word: A single word of a verse
- Verse: A verse segmented into words
- Surah: Surah metadata used for navigation
- MatchResult: Result of one verification pass
- RevealState: Words revealed so far for the active verse
"""

from tasmee.models.word import Word
from tasmee.models.verse import Surah, Verse
from tasmee.models.result import MatchResult
from tasmee.models.reveal import NavigationAction, RevealState, RevealStatus

__all__ = [
    "Word",
    "Verse",
    "Surah",
    "MatchResult",
    "RevealState",
    "RevealStatus",
    "NavigationAction",
]
