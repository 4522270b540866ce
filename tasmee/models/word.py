"""
Word data model.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from tasmee.core.arabic import normalize_arabic


class Word(BaseModel):
    """
    A single word of a verse.

    Words are created once when a verse is loaded and never mutated.

    Attributes:
        id: Globally unique, stable word identifier
        text: Display text (Uthmani script, with diacritics)
        clean_text: Normalized form used for matching
        translation: Display-only translation
    """

    id: int = Field(
        ...,
        description="Globally unique, stable word identifier",
        ge=0,
    )
    text: str = Field(
        ...,
        description="Display text of the word",
        min_length=1,
    )
    clean_text: str = Field(
        ...,
        description="Normalized form used for matching",
        min_length=1,
    )
    translation: str = Field(
        default="",
        description="Translation shown next to a revealed word",
    )

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {
                    "id": 1,
                    "text": "بِسْمِ",
                    "clean_text": "بسم",
                    "translation": "In (the) name",
                }
            ]
        },
    }

    @field_validator("clean_text")
    @classmethod
    def _clean_text_not_blank(cls, value: str) -> str:
        if not normalize_arabic(value):
            raise ValueError("clean_text must not be empty after normalization")
        return value

    @classmethod
    def from_text(
        cls,
        id: int,
        text: str,
        translation: str = "",
        source_text: Optional[str] = None,
    ) -> "Word":
        """
        Build a word, deriving clean_text by normalization.

        Args:
            id: Word identifier
            text: Display text
            translation: Translation text
            source_text: Alternative spelling to normalize (e.g. imlaei script);
                defaults to the display text
        """
        return cls(
            id=id,
            text=text,
            clean_text=normalize_arabic(source_text or text),
            translation=translation,
        )

    def __str__(self) -> str:
        return self.text
