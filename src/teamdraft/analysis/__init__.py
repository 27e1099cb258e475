"""Team balance reporting helpers."""

from .balance import (
    AGGREGATE_KEY,
    CategoryBreakdown,
    PickAdvisory,
    TeamSummary,
    pick_advisory,
    sort_unassigned,
    stat_leaders,
    team_summaries,
)

__all__ = [
    "AGGREGATE_KEY",
    "CategoryBreakdown",
    "PickAdvisory",
    "TeamSummary",
    "pick_advisory",
    "sort_unassigned",
    "stat_leaders",
    "team_summaries",
]
