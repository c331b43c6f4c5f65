"""Read-only views of engine state handed to agents and renderers."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field


class SessionPhase(StrEnum):
    in_progress = "in_progress"
    escaped = "escaped"


class LockView(BaseModel):
    """Rendering view of a lock. Never carries the answer."""

    id: str
    name: str
    solved: bool
    requires: list[str] = Field(default_factory=list)
    description: str = ""


class ToolInfo(BaseModel):
    name: str
    description: str
