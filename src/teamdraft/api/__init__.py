"""REST API hosting draft sessions.

The API is the single arbitrating host for sessions shared by several
clients. Handlers never await between reading and mutating a session, so
every engine command runs to completion on the event loop before the next
one starts.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping, Sequence

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.responses import Response

from teamdraft.analysis import AGGREGATE_KEY, pick_advisory, stat_leaders, team_summaries
from teamdraft.api.schemas import (
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
    SummaryResponse,
    TeamRenameRequest,
    TeamResponse,
    TeamSummaryResponse,
    UndoResponse,
)
from teamdraft.api.sessions import DraftSession, SessionLimitReached, SessionRegistry
from teamdraft.config import DEFAULT_PRESET, StatKey, get_stat_keys, load_settings
from teamdraft.draft import DraftEngine, DraftError
from teamdraft.export import export_teams_to_csv
from teamdraft.ingest import RosterImportError, load_roster_csv
from teamdraft.models import PlayerRecord, parse_category, player_key
from teamdraft.scoring import normalize


logger = logging.getLogger(__name__)

_STATUS_BY_KIND = {
    "configuration": 400,
    "state": 409,
    "turn": 409,
    "quota": 409,
}


def _draft_error_to_http(exc: DraftError) -> HTTPException:
    detail: dict[str, Any] = {"code": exc.code, "message": str(exc)}
    detail.update(exc.context())
    return HTTPException(status_code=_STATUS_BY_KIND.get(exc.kind, 400), detail=detail)


def _resolve_stat_keys(preset: str | None, custom: Sequence[Any] | None) -> tuple[StatKey, ...]:
    if custom:
        return tuple(
            StatKey(item.key, item.label or item.key, higher_is_better=item.higher_is_better)
            for item in custom
        )
    try:
        return get_stat_keys(preset or DEFAULT_PRESET)
    except KeyError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def _payload_to_record(payload: PlayerPayload) -> PlayerRecord:
    player_id = payload.player_id
    if not player_id:
        if not payload.group or not payload.number:
            raise HTTPException(
                status_code=400,
                detail=f"Player {payload.name!r} needs a player_id or both group and number",
            )
        player_id = player_key(payload.group, payload.number)
    return PlayerRecord(
        player_id=player_id,
        name=payload.name,
        group=payload.group,
        number=payload.number,
        category=parse_category(payload.gender),
        stats=dict(payload.stats),
    )


def _session_to_response(session: DraftSession) -> SessionResponse:
    engine = session.engine
    players = [
        ScoredPlayerResponse(
            player_id=player.player_id,
            name=player.name,
            group=player.group,
            category=player.category.value if player.category else None,
            normalized_stats=player.normalized_stats,
            aggregate_score=player.aggregate_score,
            rank_label=player.rank_label,
            is_anchor=player.is_anchor,
        )
        for player in engine.players.values()
    ]
    response = SessionResponse(
        session_id=session.session_id,
        phase=engine.phase.value,
        undo_depth=engine.undo_depth,
        players=players,
    )
    if engine.quota is None:
        return response

    state = engine.snapshot()
    response.round = state.round
    response.pick_index = state.pick_index
    response.pick_order = list(state.pick_order)
    response.current_turn = engine.current_turn()
    response.unassigned = list(state.unassigned)
    response.enforce_category_balance = engine.enforce_category_balance
    response.teams = [
        TeamResponse(
            team_id=team.team_id,
            name=team.name,
            anchor_id=team.anchor_id,
            player_ids=list(team.player_ids),
            color=team.color,
            target_slots=state.target_slots.get(team.team_id, 0),
        )
        for team in state.teams
    ]
    response.category_quota = {
        category.value: CategoryQuotaResponse(min=bound.minimum, max=bound.maximum)
        for category, bound in engine.quota.category_quota.items()
    }
    advisory = pick_advisory(engine)
    if advisory is not None:
        response.advisory = AdvisoryResponse(
            team_id=advisory.team_id,
            code=advisory.code,
            category=advisory.category.value,
            limit=advisory.limit,
            remaining_picks=advisory.remaining_picks,
        )
    return response


def _parse_mapping(raw: str | None) -> Mapping[str, str] | None:
    if not raw:
        return None
    try:
        mapping = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid mapping JSON: {exc}") from exc
    if not isinstance(mapping, dict):
        raise HTTPException(status_code=400, detail="Mapping must be a JSON object")
    return {str(key): str(value) for key, value in mapping.items()}


def _split_exclude(raw: str | None) -> list[str]:
    # Comma separated ids or names of students sitting out.
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def create_app() -> FastAPI:
    settings = load_settings()
    app = FastAPI(title="teamdraft")
    registry = SessionRegistry(settings.max_sessions)
    app.state.sessions = registry

    def _open_session(records: Sequence[PlayerRecord], stat_keys: Sequence[StatKey]) -> DraftSession:
        scored = normalize(records, stat_keys, rank_prefix=settings.rank_prefix)
        try:
            engine = DraftEngine(scored, team_name_format=settings.team_name_format)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        try:
            return registry.create(engine, stat_keys)
        except SessionLimitReached as exc:
            raise HTTPException(status_code=429, detail=str(exc)) from exc

    def _fetch_session_or_404(session_id: str) -> DraftSession:
        try:
            return registry.get(session_id)
        except KeyError:
            raise HTTPException(status_code=404, detail="Session not found") from None

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/sessions")
    async def list_sessions() -> list[dict[str, Any]]:
        return [
            {
                "session_id": session.session_id,
                "created_at": session.created_at.isoformat(),
                "phase": session.engine.phase.value,
                "players": len(session.engine.players),
            }
            for session in registry.list_sessions()
        ]

    @app.post("/sessions", response_model=SessionResponse, status_code=201)
    async def create_session(request: SessionCreateRequest) -> SessionResponse:
        stat_keys = _resolve_stat_keys(request.preset, request.stat_keys)
        records = [_payload_to_record(payload) for payload in request.players]
        return _session_to_response(_open_session(records, stat_keys))

    @app.post("/sessions/upload", response_model=SessionResponse, status_code=201)
    async def upload_session(
        roster: UploadFile = File(...),
        group: str | None = Form(None),
        preset: str | None = Form(None),
        mapping: str | None = Form(None),
        exclude: str | None = Form(None),
    ) -> SessionResponse:
        content = (await roster.read()).decode("utf-8-sig")
        if not content.strip():
            raise HTTPException(status_code=400, detail="roster file is empty")
        stat_keys = _resolve_stat_keys(preset, None)
        try:
            records = load_roster_csv(
                content,
                mapping=_parse_mapping(mapping),
                stat_keys=stat_keys,
                group=group or None,
                exclude=_split_exclude(exclude),
            )
        except RosterImportError as exc:
            logger.info("Rejected roster upload %s: %s", roster.filename, exc)
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return _session_to_response(_open_session(records, stat_keys))

    @app.get("/sessions/{session_id}", response_model=SessionResponse)
    async def get_session(session_id: str) -> SessionResponse:
        return _session_to_response(_fetch_session_or_404(session_id))

    @app.delete("/sessions/{session_id}")
    async def delete_session(session_id: str) -> dict[str, str]:
        _fetch_session_or_404(session_id)
        registry.delete(session_id)
        return {"session_id": session_id, "status": "deleted"}

    @app.post("/sessions/{session_id}/anchors", response_model=SessionResponse)
    async def select_anchors(session_id: str, request: AnchorRequest) -> SessionResponse:
        session = _fetch_session_or_404(session_id)
        enforce = request.enforce_category_balance
        if enforce is None:
            enforce = settings.enforce_category_balance
        try:
            session.engine.select_anchors(request.anchor_ids, enforce_category_balance=enforce)
        except DraftError as exc:
            raise _draft_error_to_http(exc) from exc
        return _session_to_response(session)

    @app.post("/sessions/{session_id}/picks", response_model=PickResponse)
    async def make_pick(session_id: str, request: PickRequest) -> PickResponse:
        session = _fetch_session_or_404(session_id)
        try:
            move = session.engine.assign(request.player_id, request.team_id)
        except DraftError as exc:
            raise _draft_error_to_http(exc) from exc
        return PickResponse(
            player_id=move.player_id,
            team_id=move.team_id,
            session=_session_to_response(session),
        )

    @app.post("/sessions/{session_id}/undo", response_model=UndoResponse)
    async def undo_pick(session_id: str) -> UndoResponse:
        session = _fetch_session_or_404(session_id)
        move = session.engine.undo()
        return UndoResponse(
            undone=move is not None,
            player_id=move.player_id if move else None,
            team_id=move.team_id if move else None,
            session=_session_to_response(session),
        )

    @app.post("/sessions/{session_id}/balance", response_model=SessionResponse)
    async def set_balance(session_id: str, request: BalanceRequest) -> SessionResponse:
        session = _fetch_session_or_404(session_id)
        try:
            session.engine.set_category_balance(request.enabled)
        except DraftError as exc:
            raise _draft_error_to_http(exc) from exc
        return _session_to_response(session)

    @app.patch("/sessions/{session_id}/teams/{team_id}", response_model=TeamResponse)
    async def rename_team(session_id: str, team_id: str, request: TeamRenameRequest) -> TeamResponse:
        session = _fetch_session_or_404(session_id)
        try:
            team = session.engine.rename_team(team_id, request.name)
        except DraftError as exc:
            raise _draft_error_to_http(exc) from exc
        state = session.engine.snapshot()
        return TeamResponse(
            team_id=team.team_id,
            name=team.name,
            anchor_id=team.anchor_id,
            player_ids=list(team.player_ids),
            color=team.color,
            target_slots=state.target_slots.get(team.team_id, 0),
        )

    @app.get("/sessions/{session_id}/summary", response_model=SummaryResponse)
    async def session_summary(session_id: str) -> SummaryResponse:
        session = _fetch_session_or_404(session_id)
        summaries = team_summaries(session.engine.snapshot(), session.engine.players, session.stat_keys)
        leader_keys = [AGGREGATE_KEY, *(stat.key for stat in session.stat_keys)]
        return SummaryResponse(
            teams=[
                TeamSummaryResponse(
                    team_id=summary.team_id,
                    name=summary.name,
                    size=summary.size,
                    target_slots=summary.target_slots,
                    male=summary.categories.male,
                    female=summary.categories.female,
                    other=summary.categories.other,
                    stat_means=summary.stat_means,
                    aggregate_mean=summary.aggregate_mean,
                )
                for summary in summaries
            ],
            leaders={key: stat_leaders(summaries, key) for key in leader_keys} if summaries else {},
        )

    @app.get("/sessions/{session_id}/export.csv")
    async def export_csv(session_id: str):
        session = _fetch_session_or_404(session_id)
        if session.engine.quota is None:
            raise HTTPException(status_code=409, detail="Draft has not started")
        csv_text = export_teams_to_csv(session.engine.snapshot(), session.engine.players)
        return Response(
            content=csv_text,
            media_type="text/csv",
            headers={"Content-Disposition": f"attachment; filename=teams-{session_id}.csv"},
        )

    return app


__all__ = ["create_app"]
