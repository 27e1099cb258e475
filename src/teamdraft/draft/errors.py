"""Structured rejection reasons raised by the draft engine."""

from __future__ import annotations

from typing import Any, Dict, Optional

from teamdraft.models import Category


class DraftError(RuntimeError):
    """Base class for every engine rejection.

    ``code`` is a stable identifier callers can switch on; ``context()``
    carries the values a caller needs to explain the rejection.
    """

    code = "draft_error"
    kind = "configuration"

    def context(self) -> Dict[str, Any]:
        return {}


class AnchorCountOutOfRange(DraftError):
    code = "anchor_count_out_of_range"

    def __init__(self, count: int, minimum: int, maximum: int):
        super().__init__(f"Select between {minimum} and {maximum} anchors (got {count})")
        self.count = count
        self.minimum = minimum
        self.maximum = maximum

    def context(self) -> Dict[str, Any]:
        return {"count": self.count, "minimum": self.minimum, "maximum": self.maximum}


class UnknownPlayer(DraftError):
    code = "unknown_player"

    def __init__(self, player_id: str):
        super().__init__(f"Player {player_id!r} is not on the roster")
        self.player_id = player_id

    def context(self) -> Dict[str, Any]:
        return {"player_id": self.player_id}


class UnknownTeam(DraftError):
    code = "unknown_team"

    def __init__(self, team_id: str):
        super().__init__(f"Team {team_id!r} does not exist")
        self.team_id = team_id

    def context(self) -> Dict[str, Any]:
        return {"team_id": self.team_id}


class DraftNotActive(DraftError):
    code = "draft_not_active"
    kind = "state"

    def __init__(self, phase: str):
        super().__init__(f"No picks can be made while the draft is {phase}")
        self.phase = phase

    def context(self) -> Dict[str, Any]:
        return {"phase": self.phase}


class WrongTurn(DraftError):
    code = "wrong_turn"
    kind = "turn"

    def __init__(self, team_id: str, expected_team_id: str, expected_team_name: Optional[str] = None):
        on_clock = expected_team_name or expected_team_id
        super().__init__(f"It is {on_clock}'s turn to pick, not {team_id}")
        self.team_id = team_id
        self.expected_team_id = expected_team_id
        self.expected_team_name = expected_team_name

    def context(self) -> Dict[str, Any]:
        return {
            "team_id": self.team_id,
            "expected_team_id": self.expected_team_id,
            "expected_team_name": self.expected_team_name,
        }


class AlreadyAssigned(DraftError):
    code = "already_assigned"
    kind = "turn"

    def __init__(self, player_id: str):
        super().__init__(f"Player {player_id!r} is not available to draft")
        self.player_id = player_id

    def context(self) -> Dict[str, Any]:
        return {"player_id": self.player_id}


class QuotaViolation(DraftError):
    """A pick that would break the per-team category quota."""

    code = "quota_violation"
    kind = "quota"


class CategoryMaxReached(QuotaViolation):
    code = "category_max_reached"

    def __init__(self, team_id: str, team_name: str, category: Category, maximum: int):
        super().__init__(f"{team_name} already has the maximum of {maximum} {category.value} players")
        self.team_id = team_id
        self.team_name = team_name
        self.category = category
        self.maximum = maximum

    def context(self) -> Dict[str, Any]:
        return {
            "team_id": self.team_id,
            "team_name": self.team_name,
            "category": self.category.value,
            "max": self.maximum,
        }


class CategoryShortage(QuotaViolation):
    code = "category_shortage"

    def __init__(self, category: Category, available: int, needed: int):
        super().__init__(
            f"Only {available} {category.value} players would remain but teams still need {needed}"
        )
        self.category = category
        self.available = available
        self.needed = needed

    def context(self) -> Dict[str, Any]:
        return {"category": self.category.value, "available": self.available, "needed": self.needed}


__all__ = [
    "AlreadyAssigned",
    "AnchorCountOutOfRange",
    "CategoryMaxReached",
    "CategoryShortage",
    "DraftError",
    "DraftNotActive",
    "QuotaViolation",
    "UnknownPlayer",
    "UnknownTeam",
    "WrongTurn",
]
