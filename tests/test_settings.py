from __future__ import annotations

import pytest

from puzzle_room.engine.puzzle import DEFAULT_NOISE_TOOL_COUNT
from puzzle_room.session_store import SessionStore
from puzzle_room.settings import settings_from_env


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PUZZLE_ROOM_NOISE_TOOLS", raising=False)
    monkeypatch.delenv("PUZZLE_ROOM_LOG_LEVEL", raising=False)

    s = settings_from_env()
    assert s.noise_tool_count == DEFAULT_NOISE_TOOL_COUNT
    assert s.log_level == "INFO"


def test_noise_count_from_env_feeds_new_sessions(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PUZZLE_ROOM_NOISE_TOOLS", "0")
    monkeypatch.setenv("PUZZLE_ROOM_LOG_LEVEL", "debug")

    assert settings_from_env().log_level == "DEBUG"

    session = SessionStore().create_session(seed=1)
    assert session.engine.noise_tools == []


@pytest.mark.parametrize("raw", ["lots", "-3"])
def test_bad_noise_count_rejected(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    monkeypatch.setenv("PUZZLE_ROOM_NOISE_TOOLS", raw)
    with pytest.raises(ValueError):
        settings_from_env()
