"""
Arabic text normalization.

Reduces recited or typed text to the form used for matching: diacritics
(tashkeel) and Quranic annotation marks are removed and visually or
phonetically interchangeable letters are folded to one representative.
Base letters are never removed.
"""

import re

# Harakat, tanween, shadda, sukun, superscript alif, small Quranic signs
TASHKEEL_PATTERN = re.compile(r"[\u0610-\u061A\u064B-\u065F\u0670\u06D6-\u06ED]")
TATWEEL = "\u0640"

# Letter folds applied after diacritics are gone. Extend to widen tolerance.
ORTHOGRAPHIC_FOLDS: list[tuple[re.Pattern, str]] = [
    (re.compile(r"[أإآٱ]"), "ا"),  # hamza / madda / wasla forms of alif
    (re.compile(r"ة"), "ه"),  # taa marbuta
    (re.compile(r"ى"), "ي"),  # alif maksura
]

PUNCTUATION_PATTERN = re.compile(r"[^\w\s]")
WHITESPACE_PATTERN = re.compile(r"\s+")


def normalize_arabic(text: str) -> str:
    """
    Normalize Arabic text for matching.

    Args:
        text: Raw Arabic (or Latin) text, with or without diacritics

    Returns:
        Text without tashkeel, tatweel or punctuation, with orthographic
        variants folded, whitespace collapsed and Latin letters case-folded

    Examples:
        >>> normalize_arabic("إِيَّاكَ")
        'اياك'
        >>> normalize_arabic("الرَّحْمَٰنِ الرَّحِيمِ")
        'الرحمن الرحيم'
    """
    if not text:
        return ""

    text = TASHKEEL_PATTERN.sub("", text)
    text = text.replace(TATWEEL, "")
    text = text.casefold()
    for pattern, replacement in ORTHOGRAPHIC_FOLDS:
        text = pattern.sub(replacement, text)
    text = PUNCTUATION_PATTERN.sub("", text)
    text = WHITESPACE_PATTERN.sub(" ", text).strip()
    return text


def tokenize(text: str) -> list[str]:
    """Split input on whitespace, dropping empty tokens."""
    return text.split() if text else []
