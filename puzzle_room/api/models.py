from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from puzzle_room.engine.views import LockView, SessionPhase, ToolInfo


__all__ = [
    "AgentStepResponse",
    "LockView",
    "PuzzleSnapshot",
    "SessionCreateRequest",
    "SessionListResponse",
    "SessionPhase",
    "ToolCallRequest",
    "ToolCallResponse",
    "ToolCatalogResponse",
    "ToolInfo",
]


class PuzzleSnapshot(BaseModel):
    session_id: UUID
    created_at: datetime
    last_updated_at: datetime

    # For reproducibility/debugging: the same seed yields the same decoy catalog.
    seed: int

    phase: SessionPhase = SessionPhase.in_progress
    locks: list[LockView] = Field(default_factory=list)
    inventory: list[str] = Field(default_factory=list)
    transcript: list[str] = Field(default_factory=list)
    tool_count: int = 0


class SessionCreateRequest(BaseModel):
    seed: int | None = Field(default=None, ge=0)
    noise_tool_count: int | None = Field(default=None, ge=0, le=500)


class SessionListResponse(BaseModel):
    sessions: list[PuzzleSnapshot]


class ToolCatalogResponse(BaseModel):
    tools: list[ToolInfo]


class ToolCallRequest(BaseModel):
    args: list[str] = Field(default_factory=list)


class ToolCallResponse(BaseModel):
    tool_name: str
    args: list[str]
    result: str
    snapshot: PuzzleSnapshot


class AgentStepResponse(BaseModel):
    raw_move: str
    tool_name: str
    args: list[str]
    result: str
    snapshot: PuzzleSnapshot
