"""Input adapters that turn roster sheets into player records."""

from .roster import (
    DEFAULT_ROSTER_MAPPING,
    KOREAN_ROSTER_MAPPING,
    RosterImportError,
    RosterRow,
    load_roster_csv,
    parse_student_id,
    read_roster_rows,
    rows_to_records,
)

__all__ = [
    "DEFAULT_ROSTER_MAPPING",
    "KOREAN_ROSTER_MAPPING",
    "RosterImportError",
    "RosterRow",
    "load_roster_csv",
    "parse_student_id",
    "read_roster_rows",
    "rows_to_records",
]
