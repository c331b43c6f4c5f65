from __future__ import annotations

import os

import httpx
import pytest

from puzzle_room.agent_runner import run_agent_turn
from puzzle_room.agents.ag2_backend import Ag2ChatAgent
from puzzle_room.engine.puzzle import PuzzleEngine


def _ollama_healthy(base_url: str) -> bool:
    # base_url might be http://127.0.0.1:11434/v1
    root = base_url.removesuffix("/v1")
    try:
        r = httpx.get(f"{root}/api/tags", timeout=1.0)
        return r.status_code == 200
    except Exception:
        return False


@pytest.mark.asyncio
async def test_ag2_agent_turn_env_gated() -> None:
    base_url = os.environ.get("OPENAI_BASE_URL")
    api_key = os.environ.get("OPENAI_API_KEY")

    if not (api_key or base_url):
        pytest.skip("Set OPENAI_API_KEY or OPENAI_BASE_URL")

    if base_url and not _ollama_healthy(base_url):
        pytest.skip("Ollama not reachable at OPENAI_BASE_URL")

    engine = PuzzleEngine.default(seed=1, noise_tool_count=10)
    agent = Ag2ChatAgent(name="ag2-test", model=os.environ.get("OPENAI_MODEL", "gpt-4o-mini"))

    turn = await run_agent_turn(engine=engine, agent=agent)

    assert turn.raw_move
    # Whatever the model picked, the call was transcribed.
    assert len(engine.transcript) == 3
