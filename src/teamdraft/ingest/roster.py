"""Helpers to load roster CSVs and emit canonical player records."""

from __future__ import annotations

import csv
from io import StringIO
import logging
from pathlib import Path
from typing import Collection, Dict, List, Mapping, Optional, Sequence

from pydantic import BaseModel, Field

from teamdraft.config.stats import StatKey, get_stat_keys
from teamdraft.models import PlayerRecord, parse_category, player_key


logger = logging.getLogger(__name__)

STUDENT_ID_LENGTH = 5

DEFAULT_ROSTER_MAPPING = {
    "student_id": "student_id",
    "name": "name",
    "gender": "gender",
    "height": "height",
    "shuttle_run": "shuttle_run",
    "flexibility": "flexibility",
    "fifty_meter_dash": "fifty_meter_dash",
    "underhand": "underhand",
    "serve": "serve",
}

# Column headers of the class sheet used by Korean schools.
KOREAN_ROSTER_MAPPING = {
    "student_id": "번호",
    "name": "이름",
    "gender": "성별",
    "height": "키",
    "shuttle_run": "셔틀런",
    "flexibility": "유연성",
    "fifty_meter_dash": "50m달리기",
    "underhand": "언더핸드",
    "serve": "서브",
}


class RosterImportError(ValueError):
    """Raised when a roster row cannot be turned into a player record."""

    def __init__(self, message: str, *, line: Optional[int] = None):
        prefix = f"line {line}: " if line is not None else ""
        super().__init__(f"{prefix}{message}")
        self.line = line


class RosterRow(BaseModel):
    line: int = Field(..., ge=1)
    raw_student_id: Optional[str] = None
    raw_name: str
    raw_gender: Optional[str] = None
    raw_group: Optional[str] = None
    raw_number: Optional[str] = None
    raw_stats: Dict[str, Optional[str]] = Field(default_factory=dict)

    @classmethod
    def from_mapping(
        cls,
        row: Mapping[str, Optional[str]],
        mapping: Mapping[str, str],
        *,
        stat_keys: Sequence[StatKey],
        line: int,
    ) -> "RosterRow":
        def extract(key: str) -> Optional[str]:
            column = mapping.get(key)
            if column is None:
                return None
            value = row.get(column)
            return value.strip() if value is not None else None

        return cls(
            line=line,
            raw_student_id=extract("student_id"),
            raw_name=extract("name") or "",
            raw_gender=extract("gender"),
            raw_group=extract("group"),
            raw_number=extract("number"),
            raw_stats={stat.key: extract(stat.key) for stat in stat_keys},
        )


def detect_mapping(headers: Sequence[str]) -> Mapping[str, str]:
    """Pick the Korean sheet mapping when its id column is present."""

    if KOREAN_ROSTER_MAPPING["student_id"] in headers:
        return KOREAN_ROSTER_MAPPING
    return DEFAULT_ROSTER_MAPPING


def parse_student_id(raw: str, *, line: Optional[int] = None) -> tuple[str, str]:
    """Split a 5-digit student id (grade, class, number) into group and number.

    ``30105`` is grade 3, class 1, number 5 and yields ``("1", "5")``.
    """

    text = raw.strip()
    if len(text) != STUDENT_ID_LENGTH or not text.isdigit():
        raise RosterImportError(
            f"student id {raw!r} must be a {STUDENT_ID_LENGTH}-digit number such as '30101'",
            line=line,
        )
    return str(int(text[1:3])), str(int(text[3:5]))


def _parse_stat(raw: Optional[str], *, key: str, line: int) -> Optional[float]:
    if raw is None:
        return None
    text = raw.strip()
    if not text:
        return None
    try:
        return float(text)
    except ValueError:
        raise RosterImportError(f"{key} value {raw!r} is not numeric", line=line) from None


def row_to_record(row: RosterRow) -> PlayerRecord:
    if not row.raw_name:
        raise RosterImportError("name is required", line=row.line)

    if row.raw_group and row.raw_number:
        group, number = row.raw_group, row.raw_number
    elif row.raw_student_id:
        group, number = parse_student_id(row.raw_student_id, line=row.line)
    else:
        raise RosterImportError("either a student id or group and number columns are required", line=row.line)

    stats = {key: _parse_stat(value, key=key, line=row.line) for key, value in row.raw_stats.items()}
    metadata: dict[str, object] = {"source_line": row.line}
    if row.raw_student_id:
        metadata["student_id"] = row.raw_student_id
    if row.raw_gender:
        metadata["raw_gender"] = row.raw_gender

    return PlayerRecord(
        player_id=player_key(group, number),
        name=row.raw_name,
        group=group,
        number=number,
        category=parse_category(row.raw_gender),
        stats=stats,
        metadata=metadata,
    )


def rows_to_records(
    rows: Sequence[RosterRow],
    *,
    group: Optional[str] = None,
    exclude: Collection[str] = (),
) -> List[PlayerRecord]:
    """Convert rows to records, dropping excluded players and other groups.

    ``exclude`` holds player ids or names of students sitting out.
    """

    excluded = {value.strip() for value in exclude if value.strip()}
    records: List[PlayerRecord] = []
    seen: set[str] = set()
    for row in rows:
        record = row_to_record(row)
        if record.player_id in excluded or record.name in excluded:
            logger.debug("Excluding %s (%s) from the roster", record.player_id, record.name)
            continue
        if group is not None and record.group != group:
            continue
        if record.player_id in seen:
            logger.warning("Duplicate player %s on line %d; keeping the first row", record.player_id, row.line)
            continue
        seen.add(record.player_id)
        records.append(record)
    return records


def read_roster_rows(
    text: str,
    *,
    mapping: Mapping[str, str] | None = None,
    stat_keys: Sequence[StatKey] | None = None,
) -> List[RosterRow]:
    stat_keys = stat_keys or get_stat_keys()
    reader = csv.DictReader(StringIO(text.lstrip("\ufeff")))
    headers = [header.strip() for header in reader.fieldnames or []]
    reader.fieldnames = headers
    if not headers:
        raise RosterImportError("roster is empty")
    # Partial mappings override the detected sheet layout column by column.
    mapping = {**detect_mapping(headers), **(mapping or {})}

    has_id = mapping.get("student_id") in headers
    has_group = mapping.get("group") in headers and mapping.get("number") in headers
    missing = [] if mapping.get("name") in headers else [mapping.get("name", "name")]
    if not has_id and not has_group:
        missing.append(mapping.get("student_id", "student_id"))
    if missing:
        raise RosterImportError(f"missing columns: {', '.join(missing)}", line=1)

    rows: List[RosterRow] = []
    for row in reader:
        line = reader.line_num
        if not any((value or "").strip() for value in row.values() if isinstance(value, str)):
            continue
        if None in row:
            raise RosterImportError("row has more values than the header", line=line)
        if any(row.get(header) is None for header in headers):
            raise RosterImportError("row has fewer values than the header", line=line)
        rows.append(RosterRow.from_mapping(row, mapping, stat_keys=stat_keys, line=line))
    return rows


def load_roster_csv(
    source: Path | str,
    *,
    mapping: Mapping[str, str] | None = None,
    stat_keys: Sequence[StatKey] | None = None,
    group: Optional[str] = None,
    exclude: Collection[str] = (),
) -> List[PlayerRecord]:
    """Load a roster from a CSV path or CSV text.

    Blank stat cells mean "no data". Players named in ``exclude`` (by id or
    name) are dropped before the group filter. An import that yields no
    players (for example an unknown ``group``) raises
    :class:`RosterImportError`.
    """

    if isinstance(source, Path):
        text = source.read_text(encoding="utf-8")
    else:
        text = source
    rows = read_roster_rows(text, mapping=mapping, stat_keys=stat_keys)
    records = rows_to_records(rows, group=group, exclude=exclude)
    if not records:
        if group is not None:
            raise RosterImportError(f"no players found for group {group!r}")
        raise RosterImportError("roster has no players")
    logger.debug("Loaded %d players from roster", len(records))
    return records
