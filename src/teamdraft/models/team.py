"""Team roster model."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


class Team(BaseModel):
    """A drafted team seeded by its anchor player."""

    team_id: str = Field(..., min_length=1)
    name: str
    anchor_id: str
    player_ids: List[str] = Field(default_factory=list)
    color: str = ""


def team_id_for_anchor(anchor_id: str) -> str:
    return f"team-{anchor_id}"
