"""Command-line interface for scoring a roster and previewing team quotas."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Optional, Sequence

from teamdraft.config import DEFAULT_PRESET, get_stat_keys, load_settings
from teamdraft.config_loader import ColumnProfile, ProfileError
from teamdraft.draft import plan
from teamdraft.export import export_scored_roster_to_csv
from teamdraft.ingest import RosterImportError, load_roster_csv
from teamdraft.scoring import normalize


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Score a class roster for a fair team draft")
    parser.add_argument("roster", type=Path, help="Path to roster CSV")
    parser.add_argument("--group", default=None, help="Only import players from this class/group")
    parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        help="Player id or name to leave out, e.g. an absent student (repeatable)",
    )
    parser.add_argument("--preset", default=None, help=f"Stat preset (default {DEFAULT_PRESET})")
    parser.add_argument(
        "--column",
        action="append",
        default=[],
        help="Mapping for roster CSV columns (e.g., name=Student Name)",
    )
    parser.add_argument("--load-profile", type=Path, help="Load column mapping JSON", default=None)
    parser.add_argument("--save-profile", type=Path, help="Save column mapping JSON", default=None)
    parser.add_argument("--output", type=Path, default=None, help="Write the scored roster CSV here")
    parser.add_argument("--top", type=int, default=10, help="Number of ranked players to print")
    parser.add_argument(
        "--teams",
        type=int,
        default=None,
        help="Print slot and category quotas for this many teams",
    )
    parser.add_argument(
        "--report",
        type=Path,
        default=None,
        help="Write a JSON report of the ranking (and the quota with --teams)",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def _parse_mapping(values: list[str]) -> dict[str, str]:
    mapping: dict[str, str] = {}
    for item in values:
        if "=" not in item:
            raise SystemExit(f"Invalid mapping '{item}', expected key=value")
        key, value = item.split("=", 1)
        mapping[key.strip()] = value.strip()
    return mapping


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    settings = load_settings()

    roster_mapping: dict[str, str] = {}
    preset = args.preset
    if args.load_profile:
        try:
            profile = ColumnProfile.load(args.load_profile)
        except (OSError, ProfileError) as exc:
            raise SystemExit(str(exc)) from exc
        roster_mapping.update(profile.roster_mapping)
        preset = preset or profile.preset
    roster_mapping.update(_parse_mapping(args.column))
    preset = preset or DEFAULT_PRESET

    try:
        stat_keys = get_stat_keys(preset)
    except KeyError as exc:
        raise SystemExit(str(exc)) from exc

    if args.save_profile:
        ColumnProfile(roster_mapping, preset).save(args.save_profile)
        print(f"Saved column profile to {args.save_profile}")

    try:
        records = load_roster_csv(
            args.roster,
            mapping=roster_mapping or None,
            stat_keys=stat_keys,
            group=args.group,
            exclude=args.exclude,
        )
    except RosterImportError as exc:
        raise SystemExit(f"Roster import failed: {exc}") from exc

    scored = normalize(records, stat_keys, rank_prefix=settings.rank_prefix)
    print(f"Scored {len(scored)} players")
    for player in scored[: max(0, args.top)]:
        category = player.category.value if player.category else "-"
        print(f"{player.rank_label:>10}  {player.aggregate_score:5.1f}  {category:<6}  {player.name}")

    if args.output:
        args.output.write_text(export_scored_roster_to_csv(scored, stat_keys), encoding="utf-8")
        print(f"Wrote scored roster to {args.output}")

    report_payload: dict[str, object] = {
        "preset": preset,
        "players": [
            {
                "rank_label": player.rank_label,
                "player_id": player.player_id,
                "name": player.name,
                "aggregate_score": round(player.aggregate_score, 1),
            }
            for player in scored
        ],
    }

    if args.teams is not None:
        if args.teams < 1:
            raise SystemExit("--teams must be at least 1")
        team_ids = [f"team-{index}" for index in range(1, args.teams + 1)]
        quota_plan = plan(scored, team_ids)
        print(f"Slots per team: {', '.join(str(quota_plan.per_team_slots[t]) for t in team_ids)}")
        for category, bound in quota_plan.category_quota.items():
            print(
                f"{category.value}: {quota_plan.category_totals[category]} total, "
                f"{bound.minimum}-{bound.maximum} per team"
            )
        report_payload.update(
            teams=args.teams,
            per_team_slots=dict(quota_plan.per_team_slots),
            category_quota={
                category.value: {"min": bound.minimum, "max": bound.maximum}
                for category, bound in quota_plan.category_quota.items()
            },
        )

    if args.report:
        args.report.write_text(json.dumps(report_payload, indent=2, ensure_ascii=False), encoding="utf-8")
        print(f"Wrote report to {args.report}")


if __name__ == "__main__":
    main()
