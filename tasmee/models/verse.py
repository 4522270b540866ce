"""
Verse and Surah data models.
"""

from pydantic import BaseModel, Field, model_validator

from tasmee.models.word import Word

VERSE_KEY_PATTERN = r"^\d{1,3}:\d{1,3}$"


class Verse(BaseModel):
    """
    A verse (ayah) segmented into words.

    Attributes:
        id: Identifier assigned by the content source
        key: Composite "surah:verse" key, e.g. "1:5"
        text: Full display text of the verse
        words: Words in recitation order (at least one, unique ids)
    """

    id: int = Field(
        ...,
        description="Identifier assigned by the content source",
        ge=1,
    )
    key: str = Field(
        ...,
        description='Composite "surah:verse" key',
        pattern=VERSE_KEY_PATTERN,
    )
    text: str = Field(
        ...,
        description="Full display text of the verse",
    )
    words: list[Word] = Field(
        ...,
        description="Words in recitation order",
        min_length=1,
    )

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _unique_word_ids(self) -> "Verse":
        ids = [w.id for w in self.words]
        if len(set(ids)) != len(ids):
            raise ValueError(f"duplicate word ids in verse {self.key}")
        return self

    @property
    def surah_id(self) -> int:
        """Surah number parsed from the key."""
        return int(self.key.split(":")[0])

    @property
    def verse_number(self) -> int:
        """Verse number within the surah, parsed from the key."""
        return int(self.key.split(":")[1])

    @property
    def word_ids(self) -> list[int]:
        return [w.id for w in self.words]

    @property
    def word_count(self) -> int:
        return len(self.words)

    def index_of(self, word_id: int) -> int | None:
        """Position of a word id in this verse, or None if it is not part of it."""
        for index, word in enumerate(self.words):
            if word.id == word_id:
                return index
        return None

    def __str__(self) -> str:
        return f"Verse({self.key}, {self.word_count} words)"


class Surah(BaseModel):
    """
    Surah metadata needed for navigation across pages.

    Attributes:
        id: Surah number (1-114)
        name: Display name
        first_page: First mushaf page of the surah
        last_page: Last mushaf page of the surah
    """

    id: int = Field(..., description="Surah number (1-114)", ge=1, le=114)
    name: str = Field(default="", description="Display name")
    first_page: int = Field(..., description="First mushaf page", ge=1, le=604)
    last_page: int = Field(..., description="Last mushaf page", ge=1, le=604)

    @model_validator(mode="after")
    def _page_range(self) -> "Surah":
        if self.first_page > self.last_page:
            raise ValueError(
                f"first_page {self.first_page} is after last_page {self.last_page}"
            )
        return self

    def __str__(self) -> str:
        return f"Surah({self.id}, pages {self.first_page}-{self.last_page})"
