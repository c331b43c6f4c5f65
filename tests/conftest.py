from __future__ import annotations

import os
from collections.abc import Generator
from dataclasses import dataclass, field
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from puzzle_room.agents.base import AgentAction
from puzzle_room.core.context import RenderedContext
from puzzle_room.engine.puzzle import PuzzleEngine
from puzzle_room.session_store import SessionStore


@pytest.fixture(scope="session", autouse=True)
def _load_dotenv_for_tests() -> None:
    """Load repo .env for local runs.

    In CI we don't auto-load `.env`, so env-gated integration tests stay skipped
    unless explicitly opted-in with PUZZLE_ROOM_LOAD_DOTENV_FOR_TESTS=1.
    """

    if os.environ.get("CI") and os.environ.get("PUZZLE_ROOM_LOAD_DOTENV_FOR_TESTS") != "1":
        return

    env_path = Path(__file__).resolve().parents[1] / ".env"
    if env_path.exists():
        from dotenv import load_dotenv

        load_dotenv(dotenv_path=env_path, override=False)

    # If using a local OpenAI-compatible endpoint, some clients require a key string.
    if os.environ.get("OPENAI_BASE_URL") and not os.environ.get("OPENAI_API_KEY"):
        os.environ["OPENAI_API_KEY"] = "ollama"


@pytest.fixture()
def engine() -> PuzzleEngine:
    return PuzzleEngine.default(seed=1234)


@dataclass
class ScriptedAgent:
    """Replays canned moves in order; repeats the last one when it runs out."""

    moves: list[str]
    name: str = "scripted"
    prompts: list[str] = field(default_factory=list)
    contexts: list[RenderedContext] = field(default_factory=list)

    async def propose_action(self, *, prompt: str, ctx: RenderedContext) -> AgentAction:
        self.prompts.append(prompt)
        self.contexts.append(ctx)
        idx = min(len(self.prompts) - 1, len(self.moves) - 1)
        return AgentAction(kind="move", content=self.moves[idx])


SOLVE_ALL_MOVES = [
    "victorian_attempt_combination 3063",
    "chinese_attempt_alignment 4411",
    "medieval_shout_password 53",
    "japanese_unlock_with_code 773",
    "digital_enter_pin 42",
    "library_read_journal",
    "vault_turn_wheel 979",
]


@pytest.fixture()
def client_and_store() -> Generator[tuple[TestClient, SessionStore], None, None]:
    """FastAPI TestClient wired to a fresh in-memory session store."""

    from puzzle_room.api.deps import get_store
    from puzzle_room.main import app

    store = SessionStore()

    def _override() -> SessionStore:
        return store

    app.dependency_overrides[get_store] = _override
    with TestClient(app) as c:
        yield c, store
    app.dependency_overrides.clear()
