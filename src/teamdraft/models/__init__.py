"""Player and team records."""

from .player import Category, PlayerRecord, ScoredPlayer, parse_category, player_key
from .team import Team, team_id_for_anchor

__all__ = [
    "Category",
    "PlayerRecord",
    "ScoredPlayer",
    "Team",
    "parse_category",
    "player_key",
    "team_id_for_anchor",
]
