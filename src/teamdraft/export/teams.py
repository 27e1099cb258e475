"""CSV and JSON export helpers for rosters and draft results."""

from __future__ import annotations

import csv
from io import StringIO
from pathlib import Path
from typing import Mapping, Sequence

from teamdraft.config.stats import StatKey
from teamdraft.draft.state import DraftState
from teamdraft.models import ScoredPlayer


class ExportError(RuntimeError):
    """Raised when a draft result cannot be exported."""


TEAM_HEADERS = (
    "team_id",
    "team_name",
    "color",
    "pick_order",
    "player_id",
    "name",
    "category",
    "is_anchor",
    "aggregate_score",
)


def export_teams_to_csv(state: DraftState, players: Mapping[str, ScoredPlayer]) -> str:
    """One row per team member, anchor first, in the order players joined."""

    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(TEAM_HEADERS)

    for team in state.teams:
        for position, player_id in enumerate(team.player_ids, start=1):
            player = players.get(player_id)
            if player is None:
                raise ExportError(f"Team {team.team_id} references unknown player {player_id}")
            writer.writerow([
                team.team_id,
                team.name,
                team.color,
                position,
                player.player_id,
                player.name,
                player.category.value if player.category else "",
                "1" if player_id == team.anchor_id else "0",
                f"{player.aggregate_score:.1f}",
            ])

    return buffer.getvalue()


def export_scored_roster_to_csv(players: Sequence[ScoredPlayer], stat_keys: Sequence[StatKey]) -> str:
    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow([
        "rank_label",
        "player_id",
        "name",
        "group",
        "category",
        *(stat.key for stat in stat_keys),
        "aggregate_score",
    ])
    for player in players:
        writer.writerow([
            player.rank_label,
            player.player_id,
            player.name,
            player.group,
            player.category.value if player.category else "",
            *(f"{player.normalized_stats.get(stat.key, 0.0):.1f}" for stat in stat_keys),
            f"{player.aggregate_score:.1f}",
        ])
    return buffer.getvalue()


def save_snapshot(state: DraftState, path: Path) -> None:
    path.write_text(state.model_dump_json(indent=2), encoding="utf-8")


def load_snapshot(path: Path) -> DraftState:
    return DraftState.model_validate_json(path.read_text(encoding="utf-8"))


__all__ = [
    "ExportError",
    "TEAM_HEADERS",
    "export_scored_roster_to_csv",
    "export_teams_to_csv",
    "load_snapshot",
    "save_snapshot",
]
