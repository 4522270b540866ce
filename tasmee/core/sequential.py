"""
Sequential prefix matching of input tokens against verse words.

Recitation is checked strictly left to right: the first token must match the
first word, the second token the second word, and so on. The first token
that falls below the acceptance threshold ends the scan; later tokens are
never tried against later words, so a result always covers a prefix of the
verse.
"""

from typing import Sequence

from tasmee.core.arabic import tokenize
from tasmee.core.matcher import similarity
from tasmee.models import MatchResult, Word

DEFAULT_ACCEPT_THRESHOLD = 0.7


def match_sequence(
    words: Sequence[Word],
    tokens: Sequence[str],
    threshold: float = DEFAULT_ACCEPT_THRESHOLD,
) -> MatchResult:
    """
    Greedily align input tokens to the beginning of a verse.

    Args:
        words: Verse words in recitation order
        tokens: Input tokens in the order they were spoken or typed
        threshold: Minimum similarity for a token to confirm a word

    Returns:
        MatchResult whose ids are the ids of words[0:k] for some k, with
        confidence k / len(words)

    Examples:
        Given words [بسم, الله, الرحمن] and tokens ["بسم", "xyz", "الرحمن"],
        only the first word matches: the mismatch on "xyz" stops the scan.
    """
    if not words or not tokens:
        return MatchResult.empty()

    matched_ids: list[int] = []
    cursor = 0

    for token in tokens:
        if cursor >= len(words):
            break

        word = words[cursor]
        if similarity(token, word.clean_text) < threshold:
            break

        matched_ids.append(word.id)
        cursor += 1

    confidence = min(1.0, max(0.0, len(matched_ids) / len(words)))
    return MatchResult(matched_word_ids=matched_ids, confidence=confidence)


def match_text(
    words: Sequence[Word],
    text: str,
    threshold: float = DEFAULT_ACCEPT_THRESHOLD,
) -> MatchResult:
    """Tokenize raw input and run match_sequence on it."""
    return match_sequence(words, tokenize(text), threshold=threshold)
