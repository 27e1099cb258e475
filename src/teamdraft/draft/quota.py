"""Per-team slot and category quota planning."""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Dict, Mapping, Sequence

from teamdraft.models import Category, PlayerRecord


@dataclass(frozen=True)
class CategoryQuota:
    minimum: int
    maximum: int


@dataclass(frozen=True)
class QuotaPlan:
    """Slot targets and category bounds fixed for a whole draft session."""

    per_team_slots: Mapping[str, int]
    category_quota: Mapping[Category, CategoryQuota]
    category_totals: Mapping[Category, int]

    def slots_for(self, team_id: str) -> int:
        return self.per_team_slots.get(team_id, 0)


def category_totals(roster: Sequence[PlayerRecord]) -> Dict[Category, int]:
    totals = {category: 0 for category in Category}
    for player in roster:
        if player.category is not None:
            totals[player.category] += 1
    return totals


def plan(roster: Sequence[PlayerRecord], team_ids: Sequence[str]) -> QuotaPlan:
    """Compute slot targets and category quotas from the full roster.

    ``team_ids`` must be in seeded pick order: when the roster does not split
    evenly the first ``total % teams`` teams receive the extra slot.
    """

    team_count = len(team_ids)
    if team_count < 1:
        raise ValueError("team_ids must contain at least one team")

    total = len(roster)
    base, extra = divmod(total, team_count)
    per_team_slots = {
        team_id: base + (1 if index < extra else 0) for index, team_id in enumerate(team_ids)
    }

    totals = category_totals(roster)
    category_quota = {
        category: CategoryQuota(
            minimum=count // team_count,
            maximum=math.ceil(count / team_count),
        )
        for category, count in totals.items()
    }
    return QuotaPlan(
        per_team_slots=per_team_slots,
        category_quota=category_quota,
        category_totals=totals,
    )
