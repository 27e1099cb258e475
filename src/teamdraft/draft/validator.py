"""Category quota checks run before a pick is committed."""

from __future__ import annotations

from typing import Dict, Mapping, Optional

from teamdraft.draft.errors import CategoryMaxReached, CategoryShortage, QuotaViolation
from teamdraft.draft.quota import QuotaPlan
from teamdraft.draft.state import DraftState
from teamdraft.models import Category, Team


def category_counts(team: Team, categories: Mapping[str, Optional[Category]]) -> Dict[Category, int]:
    counts = {category: 0 for category in Category}
    for player_id in team.player_ids:
        category = categories.get(player_id)
        if category is not None:
            counts[category] += 1
    return counts


def unassigned_counts(state: DraftState, categories: Mapping[str, Optional[Category]]) -> Dict[Category, int]:
    counts = {category: 0 for category in Category}
    for player_id in state.unassigned:
        category = categories.get(player_id)
        if category is not None:
            counts[category] += 1
    return counts


def tally(state: DraftState, categories: Mapping[str, Optional[Category]]) -> None:
    """Recount the running category totals from the teams and the pool."""

    state.team_category_counts = {team.team_id: category_counts(team, categories) for team in state.teams}
    state.pool_category_counts = unassigned_counts(state, categories)


def record_pick(state: DraftState, team_id: str, category: Optional[Category]) -> None:
    """Move one player of ``category`` from the pool totals to ``team_id``."""

    if category is None:
        return
    state.team_category_counts[team_id][category] += 1
    state.pool_category_counts[category] -= 1


def validate(
    player_id: str,
    target_team_id: str,
    state: DraftState,
    quota: QuotaPlan,
    categories: Mapping[str, Optional[Category]],
) -> Optional[QuotaViolation]:
    """Return the reason a pick would break the quota, or None if it is allowed.

    Two conditions must hold. The target team may not exceed the category
    maximum, and after the pick every team must still be able to reach each
    category minimum from the players left in the pool. The second check is
    global: a pick that is fine for the picking team can still starve a team
    later in the order.

    Reads the running totals on ``state``; call :func:`tally` first on a
    state that was not built by the engine.
    """

    category = categories.get(player_id)
    if category is None:
        return None

    target = state.team(target_team_id)
    if target is None:
        return None

    bound = quota.category_quota[category]
    if state.team_category_counts[target_team_id][category] + 1 > bound.maximum:
        return CategoryMaxReached(target.team_id, target.name, category, bound.maximum)

    remaining = dict(state.pool_category_counts)
    remaining[category] -= 1

    for checked in Category:
        minimum = quota.category_quota[checked].minimum
        needed = 0
        for team_id, counts in state.team_category_counts.items():
            count = counts[checked]
            if team_id == target_team_id and checked == category:
                count += 1
            needed += max(0, minimum - count)
        if needed > remaining[checked]:
            return CategoryShortage(checked, remaining[checked], needed)

    return None
