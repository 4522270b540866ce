"""
Verification result data model.
"""

from pydantic import BaseModel, Field, computed_field


class MatchResult(BaseModel):
    """
    Output of one verification pass.

    Attributes:
        matched_word_ids: Ids of the confirmed words, always a prefix of the
            verse's word ids in recitation order
        confidence: Match quality between 0.0 and 1.0
    """

    matched_word_ids: list[int] = Field(
        default_factory=list,
        description="Ids of confirmed words, a prefix of the verse in order",
    )
    confidence: float = Field(
        default=0.0,
        description="Match quality (0.0-1.0)",
        ge=0.0,
        le=1.0,
    )

    @computed_field
    @property
    def matched_count(self) -> int:
        """Number of confirmed words."""
        return len(self.matched_word_ids)

    @classmethod
    def empty(cls) -> "MatchResult":
        """A result with no matched words and zero confidence."""
        return cls(matched_word_ids=[], confidence=0.0)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"matched_word_ids": [1, 2], "confidence": 0.5},
            ]
        }
    }

    def __str__(self) -> str:
        return f"MatchResult({self.matched_count} words, confidence={self.confidence:.2f})"
