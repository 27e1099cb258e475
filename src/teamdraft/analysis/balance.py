"""Team balance summaries and pick advisories for the team on the clock."""

from __future__ import annotations

from dataclasses import dataclass, field
from statistics import fmean
from typing import Dict, List, Literal, Mapping, Optional, Sequence

from teamdraft.config.stats import StatKey
from teamdraft.draft.engine import DraftEngine
from teamdraft.draft.state import DraftState
from teamdraft.models import Category, ScoredPlayer


AGGREGATE_KEY = "aggregate"


@dataclass(frozen=True)
class CategoryBreakdown:
    male: int = 0
    female: int = 0
    other: int = 0


@dataclass(frozen=True)
class TeamSummary:
    """Averages for one team's current members."""

    team_id: str
    name: str
    size: int
    target_slots: int
    categories: CategoryBreakdown
    stat_means: Dict[str, float] = field(default_factory=dict)
    aggregate_mean: float = 0.0

    def value_for(self, key: str) -> float:
        if key == AGGREGATE_KEY:
            return self.aggregate_mean
        return self.stat_means.get(key, 0.0)


@dataclass(frozen=True)
class PickAdvisory:
    """Non-blocking hint about the quota for the team on the clock."""

    team_id: str
    code: Literal["category_max_reached", "must_pick"]
    category: Category
    limit: int
    remaining_picks: int


def _breakdown(members: Sequence[ScoredPlayer]) -> CategoryBreakdown:
    male = sum(1 for player in members if player.category is Category.MALE)
    female = sum(1 for player in members if player.category is Category.FEMALE)
    return CategoryBreakdown(male=male, female=female, other=len(members) - male - female)


def team_summaries(
    state: DraftState,
    players: Mapping[str, ScoredPlayer],
    stat_keys: Sequence[StatKey],
) -> List[TeamSummary]:
    summaries: List[TeamSummary] = []
    for team in state.teams:
        members = [players[player_id] for player_id in team.player_ids if player_id in players]
        if not members:
            summaries.append(
                TeamSummary(
                    team_id=team.team_id,
                    name=team.name,
                    size=0,
                    target_slots=state.target_slots.get(team.team_id, 0),
                    categories=CategoryBreakdown(),
                    stat_means={stat.key: 0.0 for stat in stat_keys},
                )
            )
            continue
        summaries.append(
            TeamSummary(
                team_id=team.team_id,
                name=team.name,
                size=len(members),
                target_slots=state.target_slots.get(team.team_id, 0),
                categories=_breakdown(members),
                stat_means={
                    stat.key: fmean(player.normalized_stats.get(stat.key, 0.0) for player in members)
                    for stat in stat_keys
                },
                aggregate_mean=fmean(player.aggregate_score for player in members),
            )
        )
    return summaries


def stat_leaders(summaries: Sequence[TeamSummary], key: str = AGGREGATE_KEY) -> List[str]:
    """Team ids with the highest mean for ``key``; ties are judged at one decimal."""

    leaders: List[str] = []
    best: Optional[float] = None
    for summary in summaries:
        value = round(summary.value_for(key), 1)
        if best is None or value > best:
            best = value
            leaders = [summary.team_id]
        elif value == best:
            leaders.append(summary.team_id)
    return leaders


def pick_advisory(engine: DraftEngine) -> Optional[PickAdvisory]:
    """Explain what the quota forces on the current picker, if anything.

    Only meaningful while category balance is enforced. A team at a category
    maximum is reported first; otherwise a team whose remaining target slots
    are no more than its missing category minimum must pick that category.
    """

    if not engine.enforce_category_balance or engine.quota is None:
        return None
    team = engine.current_team()
    if team is None:
        return None

    state = engine.snapshot()
    counts = state.team_category_counts[team.team_id]
    remaining = state.target_slots.get(team.team_id, 0) - len(team.player_ids)

    for category in Category:
        bound = engine.quota.category_quota[category]
        if engine.quota.category_totals[category] and counts[category] >= bound.maximum:
            return PickAdvisory(team.team_id, "category_max_reached", category, bound.maximum, remaining)

    if remaining > 0:
        for category in Category:
            bound = engine.quota.category_quota[category]
            missing = max(0, bound.minimum - counts[category])
            if missing > 0 and remaining <= missing:
                return PickAdvisory(team.team_id, "must_pick", category, bound.minimum, remaining)
    return None


def sort_unassigned(engine: DraftEngine, key: str = AGGREGATE_KEY) -> List[ScoredPlayer]:
    """Undrafted players ordered best first by a normalized stat or the aggregate."""

    state = engine.snapshot()
    pool = [engine.players[player_id] for player_id in state.unassigned]

    def sort_value(player: ScoredPlayer) -> float:
        if key == AGGREGATE_KEY:
            return player.aggregate_score
        return player.normalized_stats.get(key, 0.0)

    return sorted(pool, key=sort_value, reverse=True)
