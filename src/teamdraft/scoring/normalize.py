"""Convert raw measurements into comparable 0-100 scores."""

from __future__ import annotations

import logging
import math
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from teamdraft.config.stats import StatKey
from teamdraft.models import PlayerRecord, ScoredPlayer


logger = logging.getLogger(__name__)

SCORE_FLOOR = 30.0
SCORE_CEILING = 100.0
_SCORE_SPAN = SCORE_CEILING - SCORE_FLOOR


def is_valid_measurement(value: Optional[float]) -> bool:
    """A measurement counts only when present, finite and strictly positive."""

    if value is None:
        return False
    try:
        number = float(value)
    except (TypeError, ValueError):
        return False
    return math.isfinite(number) and number > 0


def stat_ranges(
    players: Sequence[PlayerRecord],
    stat_keys: Sequence[StatKey],
) -> Dict[str, Optional[Tuple[float, float]]]:
    """Return the (min, max) of valid values per stat key, or None when there are none."""

    ranges: Dict[str, Optional[Tuple[float, float]]] = {}
    for stat in stat_keys:
        values = [
            float(player.stats[stat.key])
            for player in players
            if is_valid_measurement(player.stats.get(stat.key))
        ]
        ranges[stat.key] = (min(values), max(values)) if values else None
    return ranges


def _scale(value: float, low: float, high: float, *, higher_is_better: bool) -> float:
    if higher_is_better:
        fraction = (value - low) / (high - low)
    else:
        fraction = (high - value) / (high - low)
    scaled = SCORE_FLOOR + fraction * _SCORE_SPAN
    return max(0.0, min(SCORE_CEILING, scaled))


def score_player(
    player: PlayerRecord,
    stat_keys: Sequence[StatKey],
    ranges: Mapping[str, Optional[Tuple[float, float]]],
) -> Tuple[Dict[str, float], float]:
    """Normalize one player's stats against precomputed ranges.

    Returns the per-key normalized scores and the aggregate score. The
    aggregate averages only the keys where the player had a valid raw value,
    so missing measurements neither drag the score down nor inflate it.
    """

    normalized: Dict[str, float] = {}
    valid_total = 0.0
    valid_count = 0
    for stat in stat_keys:
        raw = player.stats.get(stat.key)
        if not is_valid_measurement(raw):
            normalized[stat.key] = 0.0
            continue
        valid_count += 1
        bounds = ranges.get(stat.key)
        if bounds is None or bounds[0] == bounds[1]:
            normalized[stat.key] = 0.0
            continue
        low, high = bounds
        score = _scale(float(raw), low, high, higher_is_better=stat.higher_is_better)
        normalized[stat.key] = score
        valid_total += score

    aggregate = valid_total / valid_count if valid_count else 0.0
    return normalized, max(0.0, min(SCORE_CEILING, aggregate))


def normalize(
    players: Sequence[PlayerRecord],
    stat_keys: Sequence[StatKey],
    *,
    rank_prefix: str = "rank",
) -> List[ScoredPlayer]:
    """Score a roster and return it ranked by descending aggregate score.

    Ties keep their input order. ``rank_label`` is cosmetic and assigned
    after sorting (``"rank 1"``, ``"rank 2"``, ...).
    """

    ranges = stat_ranges(players, stat_keys)
    for stat in stat_keys:
        bounds = ranges[stat.key]
        if bounds is None:
            logger.debug("No valid values for stat %s; scoring it 0 for everyone", stat.key)
        elif bounds[0] == bounds[1]:
            logger.debug("Stat %s has a single distinct value %.2f; scoring it 0", stat.key, bounds[0])

    scored: List[Tuple[PlayerRecord, Dict[str, float], float]] = []
    for player in players:
        normalized, aggregate = score_player(player, stat_keys, ranges)
        scored.append((player, normalized, aggregate))

    scored.sort(key=lambda item: -item[2])

    base_fields = set(PlayerRecord.model_fields)
    return [
        ScoredPlayer(
            **player.model_dump(include=base_fields),
            normalized_stats=normalized,
            aggregate_score=aggregate,
            rank_label=f"{rank_prefix} {index}",
        )
        for index, (player, normalized, aggregate) in enumerate(scored, start=1)
    ]
