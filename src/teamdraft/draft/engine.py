"""Turn-based snake draft over a scored roster."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from teamdraft.config.stats import TEAM_COLORS
from teamdraft.draft import quota as quota_planner
from teamdraft.draft.errors import (
    AlreadyAssigned,
    AnchorCountOutOfRange,
    DraftNotActive,
    UnknownPlayer,
    UnknownTeam,
    WrongTurn,
)
from teamdraft.draft.history import DraftMove, UndoStack
from teamdraft.draft.quota import QuotaPlan
from teamdraft.draft.state import DraftState
from teamdraft.draft.validator import record_pick, tally, validate
from teamdraft.models import Category, ScoredPlayer, Team, team_id_for_anchor


logger = logging.getLogger(__name__)

MIN_ANCHORS = 2
MAX_ANCHORS = 4


class DraftPhase(str, Enum):
    AWAITING_ANCHORS = "awaiting-anchor-selection"
    DRAFTING = "drafting"
    COMPLETE = "complete"


@dataclass(frozen=True)
class DraftConfig:
    anchor_ids: Sequence[str]
    enforce_category_balance: bool = False


class DraftEngine:
    """Owns one draft session: teams, pick order, pool and undo history.

    Not thread-safe. Callers sharing a session across clients must serialize
    commands before they reach the engine.
    """

    def __init__(
        self,
        players: Sequence[ScoredPlayer],
        *,
        team_name_format: str = "Team {name}",
        colors: Sequence[str] = TEAM_COLORS,
    ) -> None:
        roster: Dict[str, ScoredPlayer] = {}
        for player in players:
            if player.player_id in roster:
                raise ValueError(f"Duplicate player id {player.player_id!r}")
            roster[player.player_id] = player
        self._base_players = roster
        self._players: Dict[str, ScoredPlayer] = dict(roster)
        self._categories: Dict[str, Optional[Category]] = {
            player_id: player.category for player_id, player in roster.items()
        }
        self._team_name_format = team_name_format
        self._colors = tuple(colors) or TEAM_COLORS
        self._state: Optional[DraftState] = None
        self._quota: Optional[QuotaPlan] = None
        self._history = UndoStack()
        # Kept outside DraftState so undo never flips it back.
        self._enforce_balance = False

    # -- read access -------------------------------------------------------

    @property
    def players(self) -> Mapping[str, ScoredPlayer]:
        return self._players

    @property
    def quota(self) -> Optional[QuotaPlan]:
        return self._quota

    @property
    def phase(self) -> DraftPhase:
        if self._state is None:
            return DraftPhase.AWAITING_ANCHORS
        if not self._state.unassigned:
            return DraftPhase.COMPLETE
        return DraftPhase.DRAFTING

    @property
    def undo_depth(self) -> int:
        return len(self._history)

    @property
    def enforce_category_balance(self) -> bool:
        return self._state is not None and self._enforce_balance

    def categories(self) -> Dict[str, Optional[Category]]:
        return dict(self._categories)

    def current_turn(self) -> Optional[str]:
        if self.phase is not DraftPhase.DRAFTING:
            return None
        return self._state.current_team_id()

    def current_team(self) -> Optional[Team]:
        team_id = self.current_turn()
        if team_id is None:
            return None
        return self._state.team(team_id)

    def is_complete(self) -> bool:
        return self.phase is DraftPhase.COMPLETE

    def snapshot(self) -> DraftState:
        """Deep copy of the live state for callers that persist or render it."""

        if self._state is None:
            return DraftState()
        return self._state.copy_state()

    # -- session setup -----------------------------------------------------

    def start(self, config: DraftConfig) -> DraftState:
        return self.select_anchors(
            config.anchor_ids,
            enforce_category_balance=config.enforce_category_balance,
        )

    def select_anchors(
        self,
        anchor_ids: Iterable[str],
        *,
        enforce_category_balance: bool = False,
    ) -> DraftState:
        """Start a new session seeded by the chosen anchors.

        The strongest anchor by aggregate score picks first. Any previous
        session and its undo history are discarded.
        """

        chosen: List[str] = []
        for anchor_id in anchor_ids:
            if anchor_id not in chosen:
                chosen.append(anchor_id)
        if not MIN_ANCHORS <= len(chosen) <= MAX_ANCHORS:
            raise AnchorCountOutOfRange(len(chosen), MIN_ANCHORS, MAX_ANCHORS)
        for anchor_id in chosen:
            if anchor_id not in self._base_players:
                raise UnknownPlayer(anchor_id)

        anchor_set = set(chosen)
        self._players = {
            player_id: player.model_copy(update={"is_anchor": player_id in anchor_set})
            for player_id, player in self._base_players.items()
        }

        teams = []
        for index, anchor_id in enumerate(chosen):
            anchor = self._players[anchor_id]
            teams.append(
                Team(
                    team_id=team_id_for_anchor(anchor_id),
                    name=self._team_name_format.format(name=anchor.name),
                    anchor_id=anchor_id,
                    player_ids=[anchor_id],
                    color=self._colors[index % len(self._colors)],
                )
            )

        seeded = sorted(chosen, key=lambda anchor_id: -self._players[anchor_id].aggregate_score)
        pick_order = [team_id_for_anchor(anchor_id) for anchor_id in seeded]

        self._quota = quota_planner.plan(list(self._players.values()), pick_order)
        self._state = DraftState(
            teams=teams,
            unassigned=[player_id for player_id in self._players if player_id not in anchor_set],
            pick_order=pick_order,
            pick_index=0,
            round=1,
            target_slots=dict(self._quota.per_team_slots),
        )
        tally(self._state, self._categories)
        self._enforce_balance = enforce_category_balance
        self._history.clear()
        logger.info(
            "Draft started with %d teams, %d players to pick, category balance %s",
            len(teams),
            len(self._state.unassigned),
            "on" if enforce_category_balance else "off",
        )
        return self.snapshot()

    def set_category_balance(self, enabled: bool) -> None:
        self._require_state()
        self._enforce_balance = enabled
        logger.info("Category balance %s", "on" if enabled else "off")

    def rename_team(self, team_id: str, name: str) -> Team:
        team = self._require_state().team(team_id)
        if team is None:
            raise UnknownTeam(team_id)
        team.name = name
        return team.model_copy(deep=True)

    # -- picking -----------------------------------------------------------

    def assign(self, player_id: str, team_id: str) -> DraftMove:
        """Commit a pick for the team on the clock.

        Every check runs before any mutation, so a rejected pick leaves the
        session exactly as it was.
        """

        phase = self.phase
        if phase is not DraftPhase.DRAFTING:
            raise DraftNotActive(phase.value)
        state = self._state

        on_clock = state.current_team_id()
        if team_id != on_clock:
            expected = state.team(on_clock)
            error = WrongTurn(team_id, on_clock, expected.name if expected else None)
            logger.info("Rejected pick of %s: %s", player_id, error.code)
            raise error

        if player_id not in state.unassigned:
            logger.info("Rejected pick of %s: %s", player_id, AlreadyAssigned.code)
            raise AlreadyAssigned(player_id)

        if self._enforce_balance:
            violation = validate(player_id, team_id, state, self._quota, self._categories)
            if violation is not None:
                logger.info("Rejected pick of %s for %s: %s", player_id, team_id, violation.code)
                raise violation

        move = DraftMove(player_id=player_id, team_id=team_id, previous=state.copy_state())
        self._history.push(move)

        state.unassigned.remove(player_id)
        state.team(team_id).player_ids.append(player_id)
        record_pick(state, team_id, self._categories[player_id])

        if state.unassigned:
            self._rotate(state)
        else:
            logger.info("Draft complete after %d picks", len(self._history))

        logger.debug(
            "Round %d: %s drafted %s; next up %s",
            move.previous.round,
            team_id,
            player_id,
            state.current_team_id(),
        )
        return move

    def undo(self) -> Optional[DraftMove]:
        """Restore the state before the most recent pick; None if there is none."""

        move = self._history.pop()
        if move is None:
            return None
        self._state = move.previous.copy_state()
        logger.debug("Undid pick of %s by %s", move.player_id, move.team_id)
        return move

    @staticmethod
    def _rotate(state: DraftState) -> None:
        if state.pick_index + 1 < len(state.pick_order):
            state.pick_index += 1
            return
        state.round += 1
        state.pick_order.reverse()
        state.pick_index = 0

    def _require_state(self) -> DraftState:
        if self._state is None:
            raise DraftNotActive(DraftPhase.AWAITING_ANCHORS.value)
        return self._state
