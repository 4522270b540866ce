"""
Similarity scoring between words.

Scores are derived from the Levenshtein edit distance of the normalized
forms, scaled by the longer string so that the result lies in [0, 1].
"""

from Levenshtein import distance

from tasmee.core.arabic import normalize_arabic


def edit_distance(a: str, b: str) -> int:
    """
    Unit-cost insert/delete/substitute distance between two strings.

    The strings are compared as given; callers normalize first.
    """
    return distance(a, b)


def similarity(text1: str, text2: str) -> float:
    """
    Calculate similarity between two texts after Arabic normalization.

    Args:
        text1: First text
        text2: Second text

    Returns:
        Similarity ratio between 0.0 and 1.0. Two texts that are both empty
        after normalization count as identical.

    Examples:
        >>> similarity("إِيَّاكَ", "اياك")
        1.0
    """
    norm1 = normalize_arabic(text1)
    norm2 = normalize_arabic(text2)

    longest = max(len(norm1), len(norm2))
    if longest == 0:
        return 1.0

    return max(0.0, 1.0 - edit_distance(norm1, norm2) / longest)
