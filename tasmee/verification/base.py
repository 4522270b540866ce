"""
Abstract base class for recitation verification.

This module defines the interface that all verifier implementations must follow.
"""

from abc import ABC, abstractmethod

from tasmee.models import MatchResult, Verse


class BaseVerifier(ABC):
    """
    Abstract interface for verifying recitation input against a verse.

    Implementations never raise on bad input: empty or unrelated text yields
    an empty or low-confidence MatchResult.

    Example:
        class MyVerifier(BaseVerifier):
            name = "mine"

            async def verify(self, verse: Verse, raw_input: str) -> MatchResult:
                ...
    """

    name: str = "base"

    @abstractmethod
    async def verify(self, verse: Verse, raw_input: str) -> MatchResult:
        """
        Determine which words from the beginning of the verse were recited.

        Args:
            verse: The reference verse
            raw_input: Latest full transcript or typed text

        Returns:
            MatchResult covering a prefix of verse.words
        """
        pass

    @property
    def is_available(self) -> bool:
        """Whether the verifier can currently be used."""
        return True

    def load(self) -> None:
        """Acquire any resources the verifier needs. No-op by default."""

    async def aclose(self) -> None:
        """Release resources held by the verifier. No-op by default."""

    async def __aenter__(self) -> "BaseVerifier":
        """Async context manager entry - loads resources."""
        self.load()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit - releases resources."""
        await self.aclose()
