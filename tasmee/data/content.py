"""
Verse content sources.

The library does not fetch text over the network itself; applications
implement ContentSource on top of whatever provider they use. This module
holds the interface, an in-memory source, and the conversion of a
quran.com v4 style payload into validated Verse objects.
"""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import ValidationError

from tasmee.exceptions import ContentSourceError, VerseDataError
from tasmee.models import Verse, Word

# Decorative end-of-verse marker in word lists
END_MARKER_TYPE = "end"


class ContentSource(ABC):
    """
    Abstract provider of verses for a mushaf page.

    Example:
        class MyProvider(ContentSource):
            async def get_verses_for_page(self, page: int) -> list[Verse]:
                payload = await fetch_page(page)
                return parse_api_verses(payload)
    """

    @abstractmethod
    async def get_verses_for_page(self, page: int) -> list[Verse]:
        """
        Get all verses printed on a page, in order.

        Args:
            page: Mushaf page number (1-604)

        Returns:
            Verses on the page, possibly spanning several surahs

        Raises:
            ContentSourceError: If the page cannot be loaded
            VerseDataError: If the provider returned invalid verse data
        """
        pass


class StaticContentSource(ContentSource):
    """ContentSource backed by a dict of page number -> verses."""

    def __init__(self, pages: dict[int, list[Verse]]):
        self._pages = pages

    async def get_verses_for_page(self, page: int) -> list[Verse]:
        if page not in self._pages:
            raise ContentSourceError("No verses for this page", page=page)
        return list(self._pages[page])


def build_verse(
    verse_id: int,
    key: str,
    text: str,
    words: list[dict[str, Any]],
) -> Verse:
    """
    Build a validated Verse from plain word dicts.

    Each word dict needs "id" and "text"; "translation" and "source_text"
    (the spelling to normalize) are optional.

    Raises:
        VerseDataError: If the verse has no words, a word normalizes to an
            empty string, or word ids repeat
    """
    try:
        built = [
            Word.from_text(
                id=w["id"],
                text=w["text"],
                translation=w.get("translation") or "",
                source_text=w.get("source_text"),
            )
            for w in words
        ]
        return Verse(id=verse_id, key=key, text=text, words=built)
    except (KeyError, ValidationError) as e:
        raise VerseDataError(f"Invalid verse data: {e}", verse_key=key)


def parse_api_verses(payload: dict[str, Any]) -> list[Verse]:
    """
    Convert a quran.com v4 "verses by page" payload into Verse objects.

    End-of-verse markers are dropped, and the imlaei spelling (falling back
    to Uthmani) is used as the normalization source.

    Args:
        payload: Decoded JSON with a "verses" list

    Returns:
        Verses in payload order

    Raises:
        VerseDataError: If any verse is malformed
    """
    verses = []
    for raw in payload.get("verses", []):
        key = raw.get("verse_key", "")
        try:
            words = [
                {
                    "id": w["id"],
                    "text": w["text_uthmani"],
                    "source_text": w.get("text_imlaei") or w["text_uthmani"],
                    "translation": (w.get("translation") or {}).get("text", ""),
                }
                for w in raw.get("words", [])
                if w.get("char_type_name") != END_MARKER_TYPE
            ]
            verse = build_verse(raw["id"], key, raw.get("text_uthmani", ""), words)
        except (KeyError, TypeError, AttributeError) as e:
            raise VerseDataError(f"Malformed verse payload: {e!r}", verse_key=key or None)
        verses.append(verse)

    return verses
