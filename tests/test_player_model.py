import pytest
from pydantic import ValidationError

from teamdraft.models import Category, PlayerRecord, ScoredPlayer, parse_category, player_key


def test_player_record_is_frozen():
    record = PlayerRecord(
        player_id="3-7",
        name="Test Player",
        group="3",
        number="7",
        category=Category.FEMALE,
        stats={"height": 151.5, "serve": None},
    )

    assert record.player_id == "3-7"
    assert record.stats["serve"] is None

    with pytest.raises((TypeError, ValidationError)):
        record.player_id = "3-8"  # type: ignore[misc]


def test_scored_player_rejects_out_of_range_aggregate():
    with pytest.raises(ValidationError):
        ScoredPlayer(player_id="p1", name="P1", aggregate_score=120.0)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("남", Category.MALE),
        ("남자", Category.MALE),
        ("M", Category.MALE),
        ("male", Category.MALE),
        ("여", Category.FEMALE),
        ("여학생", Category.FEMALE),
        ("F", Category.FEMALE),
        ("Female", Category.FEMALE),
        ("", None),
        (None, None),
        ("unknown", None),
    ],
)
def test_parse_category(raw, expected):
    assert parse_category(raw) is expected


def test_player_key_is_stable_across_imports():
    assert player_key("1", "5") == "1-5"
    assert player_key("1", "5") == player_key("1", "5")
