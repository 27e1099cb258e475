"""Undo history of committed picks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from teamdraft.draft.state import DraftState


@dataclass(frozen=True)
class DraftMove:
    """Snapshot taken immediately before a pick was committed."""

    player_id: str
    team_id: str
    previous: DraftState


class UndoStack:
    """LIFO of :class:`DraftMove` records.

    Each pushed move owns an independent deep copy of the state, so later
    in-place mutation of the live state cannot leak into history.
    """

    def __init__(self) -> None:
        self._moves: List[DraftMove] = []

    def push(self, move: DraftMove) -> None:
        self._moves.append(move)

    def pop(self) -> Optional[DraftMove]:
        if not self._moves:
            return None
        return self._moves.pop()

    def peek(self) -> Optional[DraftMove]:
        return self._moves[-1] if self._moves else None

    def clear(self) -> None:
        self._moves.clear()

    def __len__(self) -> int:
        return len(self._moves)

    def __bool__(self) -> bool:
        return bool(self._moves)
