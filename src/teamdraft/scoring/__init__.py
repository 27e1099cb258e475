"""Stat normalization and aggregate scoring."""

from .normalize import SCORE_CEILING, SCORE_FLOOR, is_valid_measurement, normalize, score_player, stat_ranges

__all__ = [
    "SCORE_CEILING",
    "SCORE_FLOOR",
    "is_valid_measurement",
    "normalize",
    "score_player",
    "stat_ranges",
]
