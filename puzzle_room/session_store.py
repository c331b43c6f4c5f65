from __future__ import annotations

import logging
import random
import threading
from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID, uuid4

from puzzle_room.api.models import PuzzleSnapshot
from puzzle_room.engine.puzzle import PuzzleEngine
from puzzle_room.settings import settings_from_env

logger = logging.getLogger(__name__)


class SessionNotFoundError(ValueError):
    pass


def _now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass(slots=True)
class PuzzleSession:
    session_id: UUID
    seed: int
    created_at: datetime
    last_updated_at: datetime
    engine: PuzzleEngine

    def execute_tool(self, name: str, args: list[str]) -> str:
        result = self.engine.execute_tool(name, args)
        self.touch()
        return result

    def touch(self) -> None:
        self.last_updated_at = _now()

    def snapshot(self) -> PuzzleSnapshot:
        engine = self.engine
        return PuzzleSnapshot(
            session_id=self.session_id,
            created_at=self.created_at,
            last_updated_at=self.last_updated_at,
            seed=self.seed,
            phase=engine.phase,
            locks=engine.lock_views(),
            inventory=engine.inventory.items(),
            transcript=engine.transcript.lines(),
            tool_count=len(engine.registry),
        )


class SessionStore:
    """In-process registry of live sessions.

    Sessions live only in memory and are gone when the process exits.
    """

    def __init__(self) -> None:
        self._sessions: dict[UUID, PuzzleSession] = {}
        self._lock = threading.Lock()

    def create_session(self, *, seed: int | None = None, noise_tool_count: int | None = None) -> PuzzleSession:
        if seed is None:
            seed = random.SystemRandom().randint(1, 2**31 - 1)
        if noise_tool_count is None:
            noise_tool_count = settings_from_env().noise_tool_count

        now = _now()
        session = PuzzleSession(
            session_id=uuid4(),
            seed=seed,
            created_at=now,
            last_updated_at=now,
            engine=PuzzleEngine.default(seed=seed, noise_tool_count=noise_tool_count),
        )

        with self._lock:
            self._sessions[session.session_id] = session

        logger.info(
            "Session created id=%s seed=%d tools=%d",
            session.session_id,
            seed,
            len(session.engine.registry),
        )
        return session

    def get_session(self, session_id: UUID) -> PuzzleSession | None:
        with self._lock:
            return self._sessions.get(session_id)

    def require_session(self, session_id: UUID) -> PuzzleSession:
        session = self.get_session(session_id)
        if session is None:
            raise SessionNotFoundError("Session not found")
        return session

    def list_sessions(self) -> list[PuzzleSession]:
        with self._lock:
            out = list(self._sessions.values())
        out.sort(key=lambda s: s.created_at, reverse=True)
        return out

    def discard(self, session_id: UUID) -> PuzzleSession:
        """Drop a session for good. Its engine state cannot be recovered."""

        with self._lock:
            session = self._sessions.pop(session_id, None)
        if session is None:
            raise SessionNotFoundError("Session not found")

        logger.info("Session discarded id=%s phase=%s", session_id, session.engine.phase.value)
        return session
