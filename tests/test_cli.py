import json

import pytest

from teamdraft.cli import main

from tests.test_roster_ingest import KOREAN_SHEET


@pytest.fixture
def roster_path(tmp_path):
    path = tmp_path / "class.csv"
    path.write_text(KOREAN_SHEET, encoding="utf-8")
    return path


def test_report_without_teams_lists_the_ranking(roster_path, tmp_path, capsys):
    report = tmp_path / "report.json"
    main([str(roster_path), "--report", str(report)])

    payload = json.loads(report.read_text(encoding="utf-8"))
    assert payload["preset"] == "VOLLEYBALL"
    assert {player["player_id"] for player in payload["players"]} == {"1-1", "1-2", "2-1"}
    assert "category_quota" not in payload
    assert f"Wrote report to {report}" in capsys.readouterr().out


def test_report_with_teams_adds_the_quota(roster_path, tmp_path):
    report = tmp_path / "report.json"
    main([str(roster_path), "--teams", "2", "--report", str(report)])

    payload = json.loads(report.read_text(encoding="utf-8"))
    assert payload["teams"] == 2
    assert payload["per_team_slots"] == {"team-1": 2, "team-2": 1}
    assert payload["category_quota"]["male"] == {"min": 1, "max": 1}
    assert len(payload["players"]) == 3


def test_exclude_drops_students_from_the_output(roster_path, tmp_path):
    output = tmp_path / "scored.csv"
    main([str(roster_path), "--exclude", "이서연", "--exclude", "2-1", "--output", str(output)])

    text = output.read_text(encoding="utf-8")
    assert "김민준" in text
    assert "이서연" not in text
    assert "박지훈" not in text


def test_profile_with_unknown_preset_exits(roster_path, tmp_path):
    profile = tmp_path / "profile.json"
    profile.write_text('{"roster_mapping": {}, "preset": "curling"}', encoding="utf-8")
    with pytest.raises(SystemExit) as excinfo:
        main([str(roster_path), "--load-profile", str(profile)])
    assert "curling" in str(excinfo.value)
