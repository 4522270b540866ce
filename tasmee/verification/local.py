"""
Local, deterministic verification using the sequential matcher.
"""

from tasmee._logging import log_verification_complete, log_verification_start
from tasmee.config import get_settings
from tasmee.core.arabic import tokenize
from tasmee.core.sequential import match_sequence
from tasmee.models import MatchResult, Verse
from tasmee.verification.base import BaseVerifier


class LocalVerifier(BaseVerifier):
    """
    Verifier that runs entirely in-process.

    Tokenizes the input and aligns it greedily against the verse words,
    stopping at the first word that scores below the threshold.

    Example:
        verifier = LocalVerifier(threshold=0.7)
        result = await verifier.verify(verse, "بسم الله")
    """

    name = "local"

    def __init__(self, threshold: float | None = None):
        """
        Args:
            threshold: Minimum similarity to accept a word
                (default: settings.local_accept_threshold)
        """
        if threshold is None:
            threshold = get_settings().local_accept_threshold
        self._threshold = threshold

    @property
    def threshold(self) -> float:
        return self._threshold

    def verify_sync(self, verse: Verse, raw_input: str) -> MatchResult:
        """Synchronous form of verify(); performs no I/O."""
        tokens = tokenize(raw_input)
        if not tokens:
            return MatchResult.empty()

        log_verification_start(verse.key, self.name, len(tokens))
        result = match_sequence(verse.words, tokens, threshold=self._threshold)
        log_verification_complete(
            verse.key, self.name, result.matched_count, verse.word_count, result.confidence
        )
        return result

    async def verify(self, verse: Verse, raw_input: str) -> MatchResult:
        return self.verify_sync(verse, raw_input)
