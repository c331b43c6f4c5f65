from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, WebSocket, WebSocketDisconnect, status

from puzzle_room.agent_runner import run_agent_turn
from puzzle_room.agents.base import Agent, AgentBackendError
from puzzle_room.api.deps import get_agent, get_store
from puzzle_room.api.models import (
    AgentStepResponse,
    PuzzleSnapshot,
    SessionCreateRequest,
    SessionListResponse,
    ToolCallRequest,
    ToolCallResponse,
    ToolCatalogResponse,
)
from puzzle_room.session_store import PuzzleSession, SessionNotFoundError, SessionStore
from puzzle_room.websocket_hub import hub

logger = logging.getLogger(__name__)

router = APIRouter()


def _require(store: SessionStore, session_id: UUID) -> PuzzleSession:
    try:
        return store.require_session(session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.websocket("/ws/session/{session_id}")
async def session_updates_ws(websocket: WebSocket, session_id: UUID) -> None:
    sid = str(session_id)
    await hub.connect(sid, websocket)

    try:
        # Keep the socket open; client can optionally send pings.
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        await hub.disconnect(sid, websocket)
    except Exception:
        await hub.disconnect(sid, websocket)
        raise


@router.get("/healthcheck")
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.post("/session", response_model=PuzzleSnapshot, status_code=status.HTTP_201_CREATED)
async def create_session_route(payload: SessionCreateRequest, store: SessionStore = Depends(get_store)) -> PuzzleSnapshot:
    try:
        session = store.create_session(seed=payload.seed, noise_tool_count=payload.noise_tool_count)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)) from e
    return session.snapshot()


@router.get("/session", response_model=SessionListResponse)
async def list_sessions_route(store: SessionStore = Depends(get_store)) -> SessionListResponse:
    return SessionListResponse(sessions=[s.snapshot() for s in store.list_sessions()])


@router.get("/session/{session_id}", response_model=PuzzleSnapshot)
async def get_session_route(session_id: UUID, store: SessionStore = Depends(get_store)) -> PuzzleSnapshot:
    return _require(store, session_id).snapshot()


@router.delete("/session/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def discard_session_route(session_id: UUID, store: SessionStore = Depends(get_store)) -> None:
    try:
        store.discard(session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.get("/session/{session_id}/tools", response_model=ToolCatalogResponse)
async def tool_catalog_route(session_id: UUID, store: SessionStore = Depends(get_store)) -> ToolCatalogResponse:
    return ToolCatalogResponse(tools=_require(store, session_id).engine.tool_catalog())


@router.post("/session/{session_id}/tools/{tool_name}", response_model=ToolCallResponse)
async def execute_tool_route(
    session_id: UUID,
    tool_name: str,
    payload: ToolCallRequest,
    store: SessionStore = Depends(get_store),
) -> ToolCallResponse:
    # Unknown tool names are not an HTTP error: NotFound is a normal, transcribed outcome.
    session = _require(store, session_id)
    result = session.execute_tool(tool_name, payload.args)
    snapshot = session.snapshot()

    await hub.publish_snapshot(snapshot)
    return ToolCallResponse(tool_name=tool_name, args=payload.args, result=result, snapshot=snapshot)


@router.post("/session/{session_id}/agent/step", response_model=AgentStepResponse)
async def agent_step_route(
    session_id: UUID,
    store: SessionStore = Depends(get_store),
    agent: Agent = Depends(get_agent),
) -> AgentStepResponse:
    session = _require(store, session_id)
    try:
        turn = await run_agent_turn(engine=session.engine, agent=agent)
    except AgentBackendError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e)) from e

    session.touch()
    snapshot = session.snapshot()

    await hub.publish_snapshot(snapshot)
    return AgentStepResponse(
        raw_move=turn.raw_move,
        tool_name=turn.tool_name,
        args=turn.args,
        result=turn.result,
        snapshot=snapshot,
    )
