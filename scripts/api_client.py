"""Lightweight REST client for the teamdraft API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def build_mapping(raw: str) -> str | None:
    if not raw:
        return None
    try:
        json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid mapping JSON: {exc}") from exc
    return raw


def _print_error(resp: httpx.Response) -> None:
    try:
        detail = resp.json().get("detail")
    except ValueError:
        detail = resp.text
    print(f"Rejected ({resp.status_code}): {json.dumps(detail, ensure_ascii=False)}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the teamdraft REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("roster", type=Path, nargs="?", help="Roster CSV to open a session with")
    parser.add_argument("--session", help="Existing session id to act on")
    parser.add_argument("--group", default=None, help="Only import this class/group")
    parser.add_argument("--exclude", action="append", default=[], help="Player id or name to leave out")
    parser.add_argument("--mapping", default="", help="JSON mapping for roster columns")
    parser.add_argument("--anchors", nargs="*", default=None, help="Anchor player ids to start the draft with")
    parser.add_argument("--balance", action="store_true", help="Enforce category balance")
    parser.add_argument(
        "--pick",
        nargs=2,
        action="append",
        default=[],
        metavar=("PLAYER_ID", "TEAM_ID"),
        help="Submit a pick (repeatable)",
    )
    parser.add_argument("--undo", type=int, default=0, help="Undo this many picks")
    parser.add_argument("--list-sessions", action="store_true", help="List open sessions and exit")
    parser.add_argument("--export-path", type=Path, help="Download the team CSV to this path")
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url) as client:
        if args.list_sessions:
            resp = client.get("/sessions")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
            return

        session_id = args.session
        if session_id is None:
            if args.roster is None:
                raise SystemExit("a roster file is required unless --session or --list-sessions is given")
            files = {"roster": (args.roster.name, args.roster.read_bytes(), "text/csv")}
            data = {
                "group": args.group,
                "mapping": build_mapping(args.mapping),
                "exclude": ",".join(args.exclude),
            }
            resp = client.post("/sessions/upload", files=files, data={k: v for k, v in data.items() if v})
            if resp.status_code >= 400:
                _print_error(resp)
                raise SystemExit(1)
            session_id = resp.json()["session_id"]
            print(f"Opened session {session_id}")

        if args.anchors:
            resp = client.post(
                f"/sessions/{session_id}/anchors",
                json={"anchor_ids": args.anchors, "enforce_category_balance": args.balance},
            )
            if resp.status_code >= 400:
                _print_error(resp)
                raise SystemExit(1)
            print(f"Draft started; {resp.json()['current_turn']} picks first")

        for player_id, team_id in args.pick:
            resp = client.post(f"/sessions/{session_id}/picks", json={"player_id": player_id, "team_id": team_id})
            if resp.status_code >= 400:
                _print_error(resp)
                continue
            session = resp.json()["session"]
            print(f"{team_id} drafted {player_id}; next up {session['current_turn']}")

        for _ in range(max(0, args.undo)):
            resp = client.post(f"/sessions/{session_id}/undo")
            resp.raise_for_status()
            payload = resp.json()
            if not payload["undone"]:
                print("Nothing to undo")
                break
            print(f"Undid {payload['player_id']} -> {payload['team_id']}")

        resp = client.get(f"/sessions/{session_id}")
        if resp.status_code == 404:
            raise SystemExit(f"session {session_id} not found")
        resp.raise_for_status()
        session = resp.json()
        print(f"Phase {session['phase']}, round {session['round']}, on the clock: {session['current_turn']}")
        if session.get("advisory"):
            print("Advisory:", json.dumps(session["advisory"]))

        if args.export_path:
            resp = client.get(f"/sessions/{session_id}/export.csv")
            if resp.status_code >= 400:
                _print_error(resp)
                raise SystemExit(1)
            args.export_path.write_text(resp.text, encoding="utf-8")
            print(f"CSV export saved to {args.export_path}")


if __name__ == "__main__":
    main()
