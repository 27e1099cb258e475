import pytest

from teamdraft.config import StatKey, get_stat_keys
from teamdraft.models import PlayerRecord
from teamdraft.scoring import is_valid_measurement, normalize, stat_ranges

SPEED = StatKey("dash", "Dash", higher_is_better=False)
JUMP = StatKey("jump", "Jump")


def _player(player_id: str, **stats) -> PlayerRecord:
    return PlayerRecord(player_id=player_id, name=player_id.upper(), stats=stats)


def _by_id(players):
    return {player.player_id: player for player in players}


def test_lower_is_better_maps_fastest_to_100():
    scored = _by_id(normalize([_player("a", dash=7.0), _player("b", dash=9.0)], [SPEED]))
    assert scored["a"].normalized_stats["dash"] == pytest.approx(100.0)
    assert scored["b"].normalized_stats["dash"] == pytest.approx(30.0)


def test_higher_is_better_rescales_linearly():
    roster = [_player("a", jump=10.0), _player("b", jump=20.0), _player("c", jump=30.0)]
    scored = _by_id(normalize(roster, [JUMP]))
    assert scored["a"].normalized_stats["jump"] == pytest.approx(30.0)
    assert scored["b"].normalized_stats["jump"] == pytest.approx(65.0)
    assert scored["c"].normalized_stats["jump"] == pytest.approx(100.0)


def test_key_without_valid_values_scores_zero_for_everyone():
    roster = [_player("a", jump=None), _player("b", jump=0.0), _player("c", jump=-3.0), _player("d")]
    scored = normalize(roster, [JUMP])
    assert all(player.normalized_stats["jump"] == 0.0 for player in scored)
    assert all(player.aggregate_score == 0.0 for player in scored)


def test_single_valid_value_scores_zero_without_dividing():
    roster = [_player("a", jump=42.0), _player("b", jump=None), _player("c", jump=0.0)]
    scored = _by_id(normalize(roster, [JUMP]))
    assert {player.normalized_stats["jump"] for player in scored.values()} == {0.0}
    assert scored["a"].aggregate_score == 0.0


def test_non_positive_values_do_not_widen_the_range():
    roster = [_player("a", jump=10.0), _player("b", jump=20.0), _player("c", jump=-50.0)]
    assert stat_ranges(roster, [JUMP]) == {"jump": (10.0, 20.0)}
    scored = _by_id(normalize(roster, [JUMP]))
    assert scored["a"].normalized_stats["jump"] == pytest.approx(30.0)
    assert scored["c"].normalized_stats["jump"] == 0.0


def test_aggregate_averages_only_keys_with_data():
    roster = [
        _player("a", jump=10.0, dash=7.0),
        _player("b", jump=20.0, dash=9.0),
        _player("c", dash=8.0),
        _player("d", jump=0.0),
    ]
    scored = normalize(roster, [JUMP, SPEED])
    by_id = _by_id(scored)

    assert by_id["a"].aggregate_score == pytest.approx(65.0)
    assert by_id["b"].aggregate_score == pytest.approx(65.0)
    # Missing jump is reported as 0 but left out of the average.
    assert by_id["c"].normalized_stats == {"jump": 0.0, "dash": pytest.approx(65.0)}
    assert by_id["c"].aggregate_score == pytest.approx(65.0)
    assert by_id["d"].aggregate_score == 0.0

    # Ties keep input order; rank labels follow the sorted order.
    assert [player.player_id for player in scored] == ["a", "b", "c", "d"]
    assert [player.rank_label for player in scored] == ["rank 1", "rank 2", "rank 3", "rank 4"]


def test_output_is_sorted_by_aggregate_descending():
    roster = [_player("slow", jump=10.0), _player("fast", jump=30.0), _player("mid", jump=20.0)]
    scored = normalize(roster, [JUMP], rank_prefix="Player")
    assert [player.player_id for player in scored] == ["fast", "mid", "slow"]
    assert scored[0].rank_label == "Player 1"


def test_all_scores_stay_within_bounds_for_volleyball_preset():
    keys = get_stat_keys()
    roster = [
        _player("p1", height=165.0, shuttle_run=40, flexibility=12.5, fifty_meter_dash=8.1, underhand=20, serve=8),
        _player("p2", height=152.0, shuttle_run=62, flexibility=-2.0, fifty_meter_dash=9.4, underhand=35, serve=None),
        _player("p3", height=171.0, shuttle_run=0, flexibility=20.0, fifty_meter_dash=7.6, underhand=5, serve=10),
        _player("p4"),
    ]
    for player in normalize(roster, keys):
        assert 0.0 <= player.aggregate_score <= 100.0
        assert set(player.normalized_stats) == {stat.key for stat in keys}
        for value in player.normalized_stats.values():
            assert 0.0 <= value <= 100.0


def test_renormalizing_scored_players_is_allowed():
    first = normalize([_player("a", jump=10.0), _player("b", jump=20.0)], [JUMP])
    second = normalize(first, [JUMP])
    assert [player.player_id for player in second] == ["b", "a"]


@pytest.mark.parametrize("value", [None, 0, -1.0, float("nan"), float("inf")])
def test_invalid_measurements(value):
    assert not is_valid_measurement(value)
