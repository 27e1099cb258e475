import pytest

from teamdraft.draft import (
    CategoryMaxReached,
    CategoryQuota,
    CategoryShortage,
    DraftState,
    QuotaPlan,
    plan,
    record_pick,
    tally,
    validate,
)
from teamdraft.models import Team

from tests.helpers import F, M, scored


def _team(team_id: str, *player_ids: str) -> Team:
    return Team(team_id=team_id, name=team_id.upper(), anchor_id=player_ids[0], player_ids=list(player_ids))


def test_plan_gives_extra_slots_to_teams_first_in_order():
    roster = [scored(f"p{index}") for index in range(13)]
    quota = plan(roster, ["t1", "t2", "t3"])
    assert dict(quota.per_team_slots) == {"t1": 5, "t2": 4, "t3": 4}
    assert sum(quota.per_team_slots.values()) == len(roster)
    assert quota.slots_for("missing") == 0


def test_plan_category_bounds_are_floor_and_ceiling():
    roster = [scored(f"f{index}", category=F) for index in range(5)]
    roster += [scored(f"m{index}", category=M) for index in range(6)]
    roster.append(scored("x"))
    quota = plan(roster, ["t1", "t2", "t3"])

    assert quota.category_quota[F] == CategoryQuota(minimum=1, maximum=2)
    assert quota.category_quota[M] == CategoryQuota(minimum=2, maximum=2)
    assert quota.category_totals == {M: 6, F: 5}


def test_plan_handles_category_absent_from_roster():
    quota = plan([scored("m1", category=M), scored("m2", category=M)], ["t1", "t2"])
    assert quota.category_quota[F] == CategoryQuota(minimum=0, maximum=0)


def test_plan_requires_a_team():
    with pytest.raises(ValueError):
        plan([scored("p1")], [])


def _shortage_fixture():
    categories = {"a1": M, "a2": M, "f1": F, "f2": F, "m1": M, "x1": None}
    quota = QuotaPlan(
        per_team_slots={"t1": 3, "t2": 3},
        category_quota={M: CategoryQuota(0, 10), F: CategoryQuota(1, 2)},
        category_totals={M: 3, F: 2},
    )
    state = DraftState(
        teams=[_team("t1", "a1", "f1"), _team("t2", "a2")],
        unassigned=["f2", "m1", "x1"],
        pick_order=["t1", "t2"],
    )
    tally(state, categories)
    return state, quota, categories


def test_pick_that_starves_another_team_is_rejected():
    state, quota, categories = _shortage_fixture()
    violation = validate("f2", "t1", state, quota, categories)
    assert isinstance(violation, CategoryShortage)
    assert violation.category is F
    assert violation.available == 0
    assert violation.needed == 1
    assert violation.context() == {"category": "female", "available": 0, "needed": 1}


def test_pick_that_leaves_enough_for_everyone_is_allowed():
    state, quota, categories = _shortage_fixture()
    assert validate("m1", "t1", state, quota, categories) is None
    assert validate("f2", "t2", state, quota, categories) is None


def test_category_maximum_is_checked_first():
    state, quota, categories = _shortage_fixture()
    tight = QuotaPlan(
        per_team_slots=quota.per_team_slots,
        category_quota={M: CategoryQuota(0, 10), F: CategoryQuota(1, 1)},
        category_totals=quota.category_totals,
    )
    violation = validate("f2", "t1", state, tight, categories)
    assert isinstance(violation, CategoryMaxReached)
    assert violation.team_id == "t1"
    assert violation.maximum == 1
    assert violation.context()["max"] == 1


def test_uncategorized_players_are_never_rejected():
    state, quota, categories = _shortage_fixture()
    assert validate("x1", "t1", state, quota, categories) is None


def test_record_pick_keeps_totals_in_step_with_a_recount():
    state, _, categories = _shortage_fixture()
    state.unassigned.remove("f2")
    state.team("t2").player_ids.append("f2")
    record_pick(state, "t2", F)
    record_pick(state, "t2", None)

    running = (state.team_category_counts, state.pool_category_counts)
    tally(state, categories)
    assert running == (state.team_category_counts, state.pool_category_counts)
    assert state.team_category_counts["t2"] == {M: 1, F: 1}
    assert state.pool_category_counts == {M: 1, F: 0}
