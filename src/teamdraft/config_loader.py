"""Persist and load CLI column mapping profiles."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from teamdraft.config.stats import iter_presets


class ProfileError(ValueError):
    """Raised when a saved column profile cannot be used."""


def _canonical_preset(preset: Optional[str], path: Path) -> Optional[str]:
    if preset is None:
        return None
    if not isinstance(preset, str):
        raise ProfileError(f"{path}: preset must be a string, got {type(preset).__name__}")
    known = {name.upper(): name for name in iter_presets()}
    name = known.get(preset.strip().upper())
    if name is None:
        raise ProfileError(f"{path}: unknown stat preset {preset!r} (known: {', '.join(sorted(known))})")
    return name


@dataclass
class ColumnProfile:
    """Roster column overrides plus the stat preset they were written for."""

    roster_mapping: Dict[str, str] = field(default_factory=dict)
    preset: Optional[str] = None

    @classmethod
    def load(cls, path: Path) -> "ColumnProfile":
        try:
            data: Any = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ProfileError(f"{path}: invalid JSON ({exc})") from exc
        if not isinstance(data, dict):
            raise ProfileError(f"{path}: expected a JSON object")

        mapping = data.get("roster_mapping") or {}
        if not isinstance(mapping, dict) or not all(
            isinstance(key, str) and isinstance(value, str) for key, value in mapping.items()
        ):
            raise ProfileError(f"{path}: roster_mapping must map field names to column headers")

        return cls(
            roster_mapping={key: value.strip() for key, value in mapping.items() if value.strip()},
            preset=_canonical_preset(data.get("preset"), path),
        )

    def save(self, path: Path) -> None:
        payload = {
            "roster_mapping": self.roster_mapping,
            "preset": self.preset.upper() if self.preset else None,
        }
        path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
