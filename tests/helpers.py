from __future__ import annotations

from teamdraft.models import Category, ScoredPlayer

M = Category.MALE
F = Category.FEMALE


def scored(player_id: str, score: float = 50.0, category: Category | None = None, **stats: float) -> ScoredPlayer:
    return ScoredPlayer(
        player_id=player_id,
        name=player_id.upper(),
        category=category,
        normalized_stats=dict(stats),
        aggregate_score=score,
    )
