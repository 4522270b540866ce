"""
Reveal state and navigation models for a recitation session.
"""

from enum import Enum

from pydantic import BaseModel, Field


class RevealStatus(str, Enum):
    """Status of the active verse."""

    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class NavigationAction(str, Enum):
    """What a navigation request resolved to."""

    NEXT_VERSE = "next_verse"
    PREVIOUS_VERSE = "previous_verse"
    NEXT_PAGE = "next_page"
    PREVIOUS_PAGE = "previous_page"
    NEXT_SURAH = "next_surah"
    PREVIOUS_SURAH = "previous_surah"
    END_OF_QURAN = "end_of_quran"
    START_OF_QURAN = "start_of_quran"


class RevealState(BaseModel):
    """
    Which words of the active verse have been confirmed so far.

    Attributes:
        verse_key: Key of the verse this state belongs to
        total_words: Number of words in the verse
        revealed_indices: Word positions confirmed during the session
        status: Current status
    """

    verse_key: str = Field(..., description="Key of the tracked verse")
    total_words: int = Field(..., description="Number of words in the verse", ge=1)
    revealed_indices: set[int] = Field(
        default_factory=set,
        description="Word positions confirmed during the session",
    )
    status: RevealStatus = Field(
        default=RevealStatus.IN_PROGRESS,
        description="Current status",
    )

    @property
    def completed(self) -> bool:
        """Whether every word has been revealed."""
        return self.status == RevealStatus.COMPLETED

    @property
    def revealed_count(self) -> int:
        return len(self.revealed_indices)

    @property
    def next_index(self) -> int | None:
        """Lowest position not yet revealed, or None when all are."""
        for index in range(self.total_words):
            if index not in self.revealed_indices:
                return index
        return None

    @property
    def progress(self) -> float:
        """Fraction of words revealed (0.0-1.0)."""
        return self.revealed_count / self.total_words

    def __str__(self) -> str:
        return (
            f"RevealState({self.verse_key}, {self.revealed_count}/{self.total_words}, "
            f"status={self.status.value})"
        )
