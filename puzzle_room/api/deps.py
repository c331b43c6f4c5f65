from __future__ import annotations

from fastapi import Request

from puzzle_room.agents.base import Agent
from puzzle_room.agents.ag2_backend import create_default_agent
from puzzle_room.session_store import SessionStore


def get_store(request: Request) -> SessionStore:
    return request.app.state.sessions


def get_agent() -> Agent:
    return create_default_agent()
