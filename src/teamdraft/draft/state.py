"""Mutable draft session state."""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from teamdraft.models import Category, Team


class DraftState(BaseModel):
    """Teams, remaining pool and pick pointer for one session.

    Equality is structural, so a restored snapshot compares equal to the
    state it was taken from. The category counters are running totals kept
    in step with ``teams`` and ``unassigned`` by the engine.
    """

    teams: List[Team] = Field(default_factory=list)
    unassigned: List[str] = Field(default_factory=list)
    pick_order: List[str] = Field(default_factory=list)
    pick_index: int = Field(default=0, ge=0)
    round: int = Field(default=1, ge=1)
    target_slots: Dict[str, int] = Field(default_factory=dict)
    team_category_counts: Dict[str, Dict[Category, int]] = Field(default_factory=dict)
    pool_category_counts: Dict[Category, int] = Field(default_factory=dict)

    def team(self, team_id: str) -> Optional[Team]:
        for team in self.teams:
            if team.team_id == team_id:
                return team
        return None

    def current_team_id(self) -> Optional[str]:
        if not self.unassigned or not self.pick_order:
            return None
        return self.pick_order[self.pick_index]

    def copy_state(self) -> "DraftState":
        return self.model_copy(deep=True)
