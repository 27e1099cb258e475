from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class StatKeyPayload(BaseModel):
    key: str = Field(..., min_length=1)
    label: str | None = None
    higher_is_better: bool = True


class PlayerPayload(BaseModel):
    player_id: str | None = None
    name: str = Field(..., min_length=1)
    group: str = ""
    number: str = ""
    gender: str | None = None
    stats: Dict[str, Optional[float]] = Field(default_factory=dict)


class SessionCreateRequest(BaseModel):
    players: List[PlayerPayload] = Field(..., min_length=1)
    preset: str | None = None
    stat_keys: List[StatKeyPayload] | None = None


class AnchorRequest(BaseModel):
    anchor_ids: List[str]
    enforce_category_balance: bool | None = None


class PickRequest(BaseModel):
    player_id: str
    team_id: str


class BalanceRequest(BaseModel):
    enabled: bool


class TeamRenameRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=80)


class ScoredPlayerResponse(BaseModel):
    player_id: str
    name: str
    group: str
    category: str | None
    normalized_stats: Dict[str, float]
    aggregate_score: float
    rank_label: str
    is_anchor: bool


class TeamResponse(BaseModel):
    team_id: str
    name: str
    anchor_id: str
    player_ids: List[str]
    color: str
    target_slots: int


class CategoryQuotaResponse(BaseModel):
    min: int
    max: int


class AdvisoryResponse(BaseModel):
    team_id: str
    code: str
    category: str
    limit: int
    remaining_picks: int


class SessionResponse(BaseModel):
    session_id: str
    phase: str
    round: int | None = None
    pick_index: int | None = None
    pick_order: List[str] = Field(default_factory=list)
    current_turn: str | None = None
    unassigned: List[str] = Field(default_factory=list)
    teams: List[TeamResponse] = Field(default_factory=list)
    undo_depth: int = 0
    enforce_category_balance: bool = False
    category_quota: Dict[str, CategoryQuotaResponse] = Field(default_factory=dict)
    advisory: AdvisoryResponse | None = None
    players: List[ScoredPlayerResponse] = Field(default_factory=list)


class PickResponse(BaseModel):
    player_id: str
    team_id: str
    session: SessionResponse


class UndoResponse(BaseModel):
    undone: bool
    player_id: str | None = None
    team_id: str | None = None
    session: SessionResponse


class TeamSummaryResponse(BaseModel):
    team_id: str
    name: str
    size: int
    target_slots: int
    male: int
    female: int
    other: int
    stat_means: Dict[str, float]
    aggregate_mean: float


class SummaryResponse(BaseModel):
    teams: List[TeamSummaryResponse]
    leaders: Dict[str, List[str]]
