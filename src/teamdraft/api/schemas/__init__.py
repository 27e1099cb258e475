"""Pydantic models for API I/O."""

from .session import (
    AdvisoryResponse,
    AnchorRequest,
    BalanceRequest,
    CategoryQuotaResponse,
    PickRequest,
    PickResponse,
    PlayerPayload,
    ScoredPlayerResponse,
    SessionCreateRequest,
    SessionResponse,
    StatKeyPayload,
    SummaryResponse,
    TeamRenameRequest,
    TeamResponse,
    TeamSummaryResponse,
    UndoResponse,
)

__all__ = [
    "AdvisoryResponse",
    "AnchorRequest",
    "BalanceRequest",
    "CategoryQuotaResponse",
    "PickRequest",
    "PickResponse",
    "PlayerPayload",
    "ScoredPlayerResponse",
    "SessionCreateRequest",
    "SessionResponse",
    "StatKeyPayload",
    "SummaryResponse",
    "TeamRenameRequest",
    "TeamResponse",
    "TeamSummaryResponse",
    "UndoResponse",
]
