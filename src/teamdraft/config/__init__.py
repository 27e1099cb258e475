"""Configuration helpers for stat presets and runtime settings."""

from .settings import Settings, load_settings
from .stats import DEFAULT_PRESET, TEAM_COLORS, StatKey, get_stat_keys, iter_presets

__all__ = [
    "DEFAULT_PRESET",
    "Settings",
    "StatKey",
    "TEAM_COLORS",
    "get_stat_keys",
    "iter_presets",
    "load_settings",
]
