"""Stat key presets for supported sports/tests."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Tuple


@dataclass(frozen=True)
class StatKey:
    key: str
    label: str
    higher_is_better: bool = True

    @property
    def lower_is_better(self) -> bool:
        return not self.higher_is_better


_PRESETS: Dict[str, Tuple[StatKey, ...]] = {
    "VOLLEYBALL": (
        StatKey("height", "Height"),
        StatKey("shuttle_run", "Shuttle run"),
        StatKey("flexibility", "Flexibility"),
        StatKey("fifty_meter_dash", "50m dash", higher_is_better=False),
        StatKey("underhand", "Underhand pass"),
        StatKey("serve", "Serve"),
    ),
    "FITNESS": (
        StatKey("shuttle_run", "Shuttle run"),
        StatKey("flexibility", "Flexibility"),
        StatKey("fifty_meter_dash", "50m dash", higher_is_better=False),
        StatKey("standing_long_jump", "Standing long jump"),
    ),
}

DEFAULT_PRESET = "VOLLEYBALL"

TEAM_COLORS: Tuple[str, ...] = (
    "#3b82f6",
    "#ef4444",
    "#22c55e",
    "#eab308",
    "#8b5cf6",
    "#ec4899",
    "#14b8a6",
    "#f97316",
)


def iter_presets() -> Iterable[str]:
    """Return the names of all configured stat presets."""

    return _PRESETS.keys()


def get_stat_keys(preset: str = DEFAULT_PRESET) -> Tuple[StatKey, ...]:
    """Fetch the stat keys for a preset, raising KeyError if missing."""

    key = preset.upper()
    if key not in _PRESETS:
        raise KeyError(f"No stat preset configured for {preset!r}")
    return _PRESETS[key]
