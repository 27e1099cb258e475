"""Draft session engine: quota planning, validation, snake order and undo."""

from .engine import MAX_ANCHORS, MIN_ANCHORS, DraftConfig, DraftEngine, DraftPhase
from .errors import (
    AlreadyAssigned,
    AnchorCountOutOfRange,
    CategoryMaxReached,
    CategoryShortage,
    DraftError,
    DraftNotActive,
    QuotaViolation,
    UnknownPlayer,
    UnknownTeam,
    WrongTurn,
)
from .history import DraftMove, UndoStack
from .quota import CategoryQuota, QuotaPlan, plan
from .state import DraftState
from .validator import record_pick, tally, validate

__all__ = [
    "AlreadyAssigned",
    "AnchorCountOutOfRange",
    "CategoryMaxReached",
    "CategoryQuota",
    "CategoryShortage",
    "DraftConfig",
    "DraftEngine",
    "DraftError",
    "DraftMove",
    "DraftNotActive",
    "DraftPhase",
    "DraftState",
    "MAX_ANCHORS",
    "MIN_ANCHORS",
    "QuotaPlan",
    "QuotaViolation",
    "UndoStack",
    "UnknownPlayer",
    "UnknownTeam",
    "plan",
    "record_pick",
    "tally",
    "validate",
]
