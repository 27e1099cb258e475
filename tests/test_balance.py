import pytest

from teamdraft.analysis import (
    AGGREGATE_KEY,
    PickAdvisory,
    pick_advisory,
    sort_unassigned,
    stat_leaders,
    team_summaries,
)
from teamdraft.config import StatKey
from teamdraft.draft import DraftEngine

from tests.helpers import F, M, scored

JUMP = StatKey("jump", "Jump")


def _advisory_engine(enforce=True):
    players = [
        scored("a1", 90.0, M),
        scored("a2", 80.0, M),
        scored("m1", 60.0, M),
        scored("m2", 55.0, M),
        scored("m3", 50.0, M),
        scored("f1", 45.0, F),
        scored("f2", 40.0, F),
    ]
    engine = DraftEngine(players)
    engine.select_anchors(["a1", "a2"], enforce_category_balance=enforce)
    return engine


def test_team_summaries_average_members():
    engine = DraftEngine(
        [
            scored("a1", 80.0, M, jump=90.0),
            scored("a2", 70.0, F, jump=40.0),
            scored("p1", 40.0, F, jump=50.0),
            scored("p2", 20.0, None, jump=30.0),
        ]
    )
    engine.select_anchors(["a1", "a2"])
    engine.assign("p1", "team-a1")

    summaries = {summary.team_id: summary for summary in team_summaries(engine.snapshot(), engine.players, [JUMP])}
    first = summaries["team-a1"]
    assert first.size == 2
    assert first.target_slots == 2
    assert first.aggregate_mean == pytest.approx(60.0)
    assert first.stat_means["jump"] == pytest.approx(70.0)
    assert (first.categories.male, first.categories.female, first.categories.other) == (1, 1, 0)
    assert first.value_for(AGGREGATE_KEY) == pytest.approx(60.0)
    assert first.value_for("missing") == 0.0
    assert summaries["team-a2"].aggregate_mean == pytest.approx(70.0)


def test_stat_leaders_tie_at_one_decimal():
    engine = DraftEngine(
        [
            scored("a1", 65.04),
            scored("a2", 65.01),
            scored("a3", 10.0),
            scored("p1", 5.0),
        ]
    )
    engine.select_anchors(["a1", "a2", "a3"])
    summaries = team_summaries(engine.snapshot(), engine.players, [])
    assert stat_leaders(summaries) == ["team-a1", "team-a2"]
    assert stat_leaders([]) == []


def test_must_pick_advisory_when_slots_run_short():
    engine = _advisory_engine()
    engine.assign("m1", "team-a1")
    assert pick_advisory(engine) is None

    engine.assign("m2", "team-a2")
    assert engine.current_turn() == "team-a2"
    assert pick_advisory(engine) == PickAdvisory("team-a2", "must_pick", F, 1, 1)


def test_max_reached_advisory_comes_first():
    engine = _advisory_engine()
    for player_id, team_id in [("m1", "team-a1"), ("m2", "team-a2"), ("f1", "team-a2"), ("m3", "team-a1")]:
        engine.assign(player_id, team_id)

    assert engine.current_turn() == "team-a1"
    advisory = pick_advisory(engine)
    assert advisory.code == "category_max_reached"
    assert advisory.category is M
    assert advisory.limit == 3
    assert advisory.remaining_picks == 1


def test_no_advisory_without_balance_or_after_completion():
    relaxed = _advisory_engine(enforce=False)
    relaxed.assign("m1", "team-a1")
    relaxed.assign("m2", "team-a2")
    assert pick_advisory(relaxed) is None

    engine = _advisory_engine()
    for player_id, team_id in [
        ("m1", "team-a1"),
        ("m2", "team-a2"),
        ("f1", "team-a2"),
        ("m3", "team-a1"),
        ("f2", "team-a1"),
    ]:
        engine.assign(player_id, team_id)
    assert engine.is_complete()
    assert pick_advisory(engine) is None


def test_no_advisory_before_draft_starts():
    engine = DraftEngine([scored("a1"), scored("a2")])
    assert pick_advisory(engine) is None


def test_sort_unassigned_by_aggregate_and_stat():
    engine = DraftEngine(
        [
            scored("a1", 90.0, jump=10.0),
            scored("a2", 80.0, jump=20.0),
            scored("p1", 30.0, jump=100.0),
            scored("p2", 60.0, jump=50.0),
            scored("p3", 45.0),
        ]
    )
    engine.select_anchors(["a1", "a2"])
    assert [player.player_id for player in sort_unassigned(engine)] == ["p2", "p3", "p1"]
    assert [player.player_id for player in sort_unassigned(engine, "jump")] == ["p1", "p2", "p3"]
