"""Keyword data models."""

from enum import Enum
from typing import Any

from pydantic import Field, field_validator

from crossnegatives.models.base import FrozenModel


class KeywordMatchType(str, Enum):
    """Keyword match type values."""

    EXACT = "EXACT"
    PHRASE = "PHRASE"
    BROAD = "BROAD"


class KeywordStatus(str, Enum):
    """Keyword status values."""

    ENABLED = "ENABLED"
    PAUSED = "PAUSED"
    REMOVED = "REMOVED"


class Keyword(FrozenModel):
    """Positive keyword read from a campaign or ad group."""

    keyword_id: str | None = Field(None, description="Platform keyword ID")
    text: str = Field(..., min_length=1, description="Keyword text")
    match_type: KeywordMatchType | None = Field(
        ..., description="Match type, None when the platform reports an unknown one"
    )
    status: KeywordStatus = Field(default=KeywordStatus.ENABLED)
    cost: float = Field(default=0.0, ge=0.0, description="Cost over the ranking window")

    @field_validator("match_type", mode="before")
    @classmethod
    def coerce_match_type(cls, v: Any) -> KeywordMatchType | None:
        """Map unknown match type names to None instead of failing."""
        if v is None or isinstance(v, KeywordMatchType):
            return v
        name = getattr(v, "name", v)
        try:
            return KeywordMatchType(str(name).upper())
        except ValueError:
            return None
