"""Canonical player models shared across ingestion, scoring and drafting."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class Category(str, Enum):
    """Binary category used for per-team quotas."""

    MALE = "male"
    FEMALE = "female"


_MALE_TOKENS = {"m", "male", "man", "boy", "b"}
_FEMALE_TOKENS = {"f", "female", "woman", "girl", "g", "w"}


def parse_category(raw: Optional[str]) -> Optional[Category]:
    """Map a free-form gender label onto a :class:`Category`.

    Korean sheets use labels such as ``남`` / ``남자`` and ``여`` / ``여자``, so
    those are matched as substrings. Unrecognised values are unspecified.
    """

    if raw is None:
        return None
    if isinstance(raw, Category):
        return raw
    text = str(raw).strip()
    if not text:
        return None
    if "남" in text:
        return Category.MALE
    if "여" in text:
        return Category.FEMALE
    token = text.lower()
    if token in _MALE_TOKENS:
        return Category.MALE
    if token in _FEMALE_TOKENS:
        return Category.FEMALE
    return None


def player_key(group: str, number: str) -> str:
    """Stable identity so repeated imports of a student resolve to one player."""

    return f"{group}-{number}"


class PlayerRecord(BaseModel):
    """Raw player payload with unnormalized measurements."""

    player_id: str = Field(..., min_length=1)
    name: str
    group: str = ""
    number: str = ""
    category: Optional[Category] = None
    stats: Dict[str, Optional[float]] = Field(default_factory=dict)
    metadata: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)


class ScoredPlayer(PlayerRecord):
    """Player with normalized 0-100 stat scores and an aggregate score."""

    normalized_stats: Dict[str, float] = Field(default_factory=dict)
    aggregate_score: float = Field(default=0.0, ge=0.0, le=100.0)
    rank_label: str = ""
    is_anchor: bool = False
