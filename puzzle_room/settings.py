from __future__ import annotations

import os
from dataclasses import dataclass

from puzzle_room.engine.puzzle import DEFAULT_NOISE_TOOL_COUNT


@dataclass(frozen=True, slots=True)
class PuzzleRoomSettings:
    noise_tool_count: int
    log_level: str


def _int_from_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e
    if value < 0:
        raise ValueError(f"{name} must be >= 0, got {value}")
    return value


def settings_from_env() -> PuzzleRoomSettings:
    return PuzzleRoomSettings(
        noise_tool_count=_int_from_env("PUZZLE_ROOM_NOISE_TOOLS", DEFAULT_NOISE_TOOL_COUNT),
        log_level=os.environ.get("PUZZLE_ROOM_LOG_LEVEL", "INFO").upper(),
    )
