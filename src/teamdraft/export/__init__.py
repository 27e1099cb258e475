"""Export helpers for scored rosters and finished teams."""

from .teams import (
    ExportError,
    export_scored_roster_to_csv,
    export_teams_to_csv,
    load_snapshot,
    save_snapshot,
)

__all__ = [
    "ExportError",
    "export_scored_roster_to_csv",
    "export_teams_to_csv",
    "load_snapshot",
    "save_snapshot",
]
